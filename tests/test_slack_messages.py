from repobot.responses import Author, Field, StructuredResponse
from repobot.slack_messages import to_attachment, to_message


def test_attachment_maps_all_parts():
    response = StructuredResponse(
        title="#1 Bug",
        url="https://github.com/a/b/issues/1",
        description="Body",
        color=0x238636,
        thumbnail_url="https://thumb",
        image_url="https://image",
        author=Author(name="octocat", icon_url="https://icon", url="https://github.com/octocat"),
        fields=(Field("Created", "2024-01-02", inline=True),),
        footer="Latency: 3ms",
    )
    attachment = to_attachment(response)
    assert attachment["color"] == "#238636"
    assert attachment["title"] == "#1 Bug"
    assert attachment["title_link"] == "https://github.com/a/b/issues/1"
    assert attachment["text"] == "Body"
    assert attachment["thumb_url"] == "https://thumb"
    assert attachment["image_url"] == "https://image"
    assert attachment["author_name"] == "octocat"
    assert attachment["author_icon"] == "https://icon"
    assert attachment["author_link"] == "https://github.com/octocat"
    assert attachment["fields"] == [{"title": "Created", "value": "2024-01-02", "short": True}]
    assert attachment["footer"] == "Latency: 3ms"


def test_minimal_message():
    message = to_message(StructuredResponse(description="Pong!"))
    attachment = message["attachments"][0]
    assert attachment["color"] == "#24292E"
    assert "title" not in attachment
    assert "fields" not in attachment
