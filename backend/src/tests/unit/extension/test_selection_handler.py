"""
Unit tests for selection handling and preview payload parsing.
"""

import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from teamsbot.core.exceptions import MalformedSelectionError
from teamsbot.extension.query import build_preview_attachment
from teamsbot.extension.selection import SelectionHandler
from teamsbot.schemas.character import CharacterRecord, PreviewPayload

THUMBNAIL = "application/vnd.microsoft.card.thumbnail"

IRON_MAN_PAYLOAD = ["Iron Man", "Robert Downey Jr.", "Tony Stark", "", "https://x/ironman"]


class TestPreviewPayloadParse:
    def test_array_form(self):
        payload = PreviewPayload.parse(IRON_MAN_PAYLOAD)

        assert payload.name == "Iron Man"
        assert payload.actor == "Robert Downey Jr."
        assert payload.real_name == "Tony Stark"
        assert payload.image_url == ""
        assert payload.profile_link == "https://x/ironman"

    def test_positional_object_form(self):
        raw = {f"Item{i}": v for i, v in enumerate(IRON_MAN_PAYLOAD, start=1)}
        assert PreviewPayload.parse(raw) == PreviewPayload.parse(IRON_MAN_PAYLOAD)

    def test_null_image_allowed(self):
        payload = PreviewPayload.parse(["Vision", "Paul Bettany", "Vision", None, "https://x/vision"])
        assert payload.image_url is None

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "Iron Man",
            42,
            IRON_MAN_PAYLOAD[:4],
            IRON_MAN_PAYLOAD + ["extra"],
            ["Iron Man", 7, "Tony Stark", "", "https://x/ironman"],
            [None, "Robert Downey Jr.", "Tony Stark", "", "https://x/ironman"],
            {"Item1": "Iron Man", "Item2": "Robert Downey Jr."},
            {"name": "Iron Man"},
        ],
    )
    def test_malformed(self, raw):
        with pytest.raises(MalformedSelectionError) as exc_info:
            PreviewPayload.parse(raw)
        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "MALFORMED_SELECTION"


class TestHandleSelection:
    @pytest.mark.asyncio
    async def test_detail_card(self):
        wire = (await SelectionHandler().handle_selection(IRON_MAN_PAYLOAD)).to_wire()

        assert wire == {
            "composeExtension": {
                "type": "result",
                "attachmentLayout": "list",
                "attachments": [
                    {
                        "contentType": THUMBNAIL,
                        "content": {
                            "title": "Iron Man",
                            "subtitle": "Robert Downey Jr., Tony Stark",
                            "buttons": [
                                {"type": "openUrl", "title": "Marvel Profile", "value": "https://x/ironman"}
                            ],
                        },
                    }
                ],
            }
        }

    @pytest.mark.asyncio
    async def test_image_rendered_when_present(self):
        raw = ["Thor", "Chris Hemsworth", "Thor Odinson", "https://x/thor.png", "https://x/thor"]

        wire = (await SelectionHandler().handle_selection(raw)).to_wire()

        content = wire["composeExtension"]["attachments"][0]["content"]
        assert content["images"] == [{"url": "https://x/thor.png", "alt": "Icon"}]

    @pytest.mark.asyncio
    async def test_accepts_parsed_payload(self):
        payload = PreviewPayload.parse(IRON_MAN_PAYLOAD)
        wire = (await SelectionHandler().handle_selection(payload)).to_wire()
        assert wire["composeExtension"]["attachments"][0]["content"]["title"] == "Iron Man"

    @pytest.mark.asyncio
    async def test_malformed_payload_raises(self):
        with pytest.raises(MalformedSelectionError):
            await SelectionHandler().handle_selection({"unexpected": True})


text = st.text(max_size=20)


@given(name=text, actor=text, real_name=text, image=st.one_of(st.none(), text), link=text)
@settings(max_examples=50)
def test_tapped_preview_expands_to_same_character(name, actor, real_name, image, link):
    record = CharacterRecord(name=name, actor=actor, realname=real_name, image=image, link=link)
    tap_value = build_preview_attachment(record).to_wire()["preview"]["content"]["tap"]["value"]

    response = asyncio.run(SelectionHandler().handle_selection(tap_value))
    content = response.to_wire()["composeExtension"]["attachments"][0]["content"]

    assert content["title"] == name
    assert content["subtitle"] == f"{actor}, {real_name}"
    assert content["buttons"][0]["value"] == link
    assert ("images" in content) == bool(image)
