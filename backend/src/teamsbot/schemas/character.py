"""Pydantic schemas for character records and invoke inputs.

Untyped invoke payloads are validated into these fixed-shape models; shape
mismatches raise typed errors instead of being coerced.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter, ValidationError, model_validator

from ..core.exceptions import InvalidCommandInputError, MalformedQueryError, MalformedSelectionError

QUERY_TEXT_PARAMETER = "queryText"

# Positional order of a preview payload; mirrors CharacterRecord
PREVIEW_PAYLOAD_FIELDS = ("name", "actor", "real_name", "image_url", "profile_link")


class CharacterRecord(BaseModel):
    """One entry of the character data source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str
    actor: str
    real_name: str = Field(..., alias="realname")
    image_url: str | None = Field(None, alias="image")
    profile_link: str = Field(..., alias="link")


class QueryParameter(BaseModel):
    """A single named value from a query invoke."""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr | None = None
    value: Any = None

    @property
    def text(self) -> str:
        """The value when it is a string, otherwise an empty string."""
        return self.value if isinstance(self.value, str) else ""

    @classmethod
    def parse_list(cls, raw: Any) -> list["QueryParameter"]:
        """Validate an untyped ``parameters`` value into QueryParameters.

        ``None`` means no parameters.

        Raises:
            MalformedQueryError: If the value is not a list of objects.
        """
        if raw is None:
            return []
        try:
            return _QUERY_PARAMETERS_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise MalformedQueryError(
                "expected a list of {name, value} objects",
                details={"type": type(raw).__name__, "errors": [list(err["loc"]) for err in e.errors()]},
            ) from e


_QUERY_PARAMETERS_ADAPTER = TypeAdapter(list[QueryParameter])


class PreviewPayload(BaseModel):
    """Values echoed back by the client when a preview card is tapped.

    On the wire this is a positional five-element array:
    ``[name, actor, realName, imageUrl, profileLink]``.
    """

    model_config = ConfigDict(frozen=True)

    name: StrictStr
    actor: StrictStr
    real_name: StrictStr
    image_url: StrictStr | None = None
    profile_link: StrictStr

    @classmethod
    def from_record(cls, record: CharacterRecord) -> "PreviewPayload":
        return cls(
            name=record.name,
            actor=record.actor,
            real_name=record.real_name,
            image_url=record.image_url,
            profile_link=record.profile_link,
        )

    def to_value(self) -> list[str | None]:
        """Serialize to the positional array attached to a preview tap."""
        return [getattr(self, field) for field in PREVIEW_PAYLOAD_FIELDS]

    @classmethod
    def parse(cls, raw: Any) -> "PreviewPayload":
        """Validate an untyped selectItem value into a PreviewPayload.

        Accepts the positional array form and the ``{"Item1": ..., "Item5": ...}``
        object form produced by value-tuple serializers.

        Raises:
            MalformedSelectionError: If the value is not a five-field tuple of strings.
        """
        if isinstance(raw, dict):
            keys = [f"Item{i}" for i in range(1, len(PREVIEW_PAYLOAD_FIELDS) + 1)]
            missing = [k for k in keys if k not in raw]
            if missing:
                raise MalformedSelectionError(
                    f"object payload is missing positional keys {missing}",
                    details={"missing": missing},
                )
            values = [raw[k] for k in keys]
        elif isinstance(raw, (list, tuple)):
            values = list(raw)
        else:
            raise MalformedSelectionError(
                f"expected a 5-element array, got {type(raw).__name__}",
                details={"type": type(raw).__name__},
            )

        if len(values) != len(PREVIEW_PAYLOAD_FIELDS):
            raise MalformedSelectionError(
                f"expected {len(PREVIEW_PAYLOAD_FIELDS)} fields, got {len(values)}",
                details={"length": len(values)},
            )

        try:
            return cls(**dict(zip(PREVIEW_PAYLOAD_FIELDS, values)))
        except ValidationError as e:
            raise MalformedSelectionError(
                "payload fields must be strings",
                details={"errors": [err["loc"][0] for err in e.errors()]},
            ) from e


class CreateCardInput(BaseModel):
    """Form fields submitted with the CreateAvenger command.

    ``image_url`` is accepted but never rendered; composed cards always use
    the configured placeholder image.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: StrictStr
    actor: StrictStr
    image_url: StrictStr | None = Field(None, alias="image")

    @model_validator(mode="before")
    @classmethod
    def _lowercase_keys(cls, data: Any) -> Any:
        # Client forms may send "Name"/"Actor"/"Image"
        if isinstance(data, dict):
            return {str(k).lower() if str(k).lower() in ("name", "actor", "image") else k: v for k, v in data.items()}
        return data

    @classmethod
    def parse(cls, command_id: str, raw: Any) -> "CreateCardInput":
        if not isinstance(raw, dict):
            raise InvalidCommandInputError(command_id, f"expected an object, got {type(raw).__name__}")
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            raise InvalidCommandInputError(
                command_id,
                f"invalid or missing fields: {fields}",
                details={"command_id": command_id, "fields": fields},
            ) from e
