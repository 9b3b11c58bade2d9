"""Messaging extension manifest.

Mirrors the ``composeExtensions`` section of the app manifest uploaded to the
chat client: the command ids declared here are the keys the client sends
back in query and submitAction invokes.
"""

EXTENSION_MANIFEST = {
    "name": "teamsbot",
    "display_name": "Avengers",
    "version": "1.0.0",
    "module": "teamsbot.extension.handler:MessagingExtensionHandler",
    "commands": [
        {
            "id": "searchQuery",
            "type": "query",
            "title": "Search",
            "description": "Find an Avenger by name",
            "initialRun": True,
            "parameters": [
                {"name": "queryText", "title": "Search", "description": "Character name"},
            ],
        },
        {
            "id": "CreateAvenger",
            "type": "action",
            "title": "Create Card",
            "description": "Compose a card for a new Avenger",
            "fetchTask": False,
            "context": ["compose", "commandBox"],
            "parameters": [
                {"name": "name", "title": "Name", "description": "Character name"},
                {"name": "actor", "title": "Actor", "description": "Who plays the character"},
                {"name": "image", "title": "Image", "description": "Image URL"},
            ],
        },
    ],
}
