"""
Slack rendering of structured responses as a single message attachment.
"""
from repobot.responses import StructuredResponse


def to_attachment(response: StructuredResponse) -> dict:
    attachment = {
        "color": f"#{response.color:06X}",
        "text": response.description,
        "fallback": response.title or response.description[:200],
        "mrkdwn_in": ["text", "fields"],
    }
    if response.title:
        attachment["title"] = response.title
    if response.url:
        attachment["title_link"] = response.url
    if response.thumbnail_url:
        attachment["thumb_url"] = response.thumbnail_url
    if response.image_url:
        attachment["image_url"] = response.image_url
    if response.author:
        attachment["author_name"] = response.author.name
        if response.author.icon_url:
            attachment["author_icon"] = response.author.icon_url
        if response.author.url:
            attachment["author_link"] = response.author.url
    if response.fields:
        attachment["fields"] = [
            {"title": f.name, "value": f.value, "short": f.inline} for f in response.fields
        ]
    if response.footer:
        attachment["footer"] = response.footer
    return attachment


def to_message(response: StructuredResponse) -> dict:
    """Keyword arguments for Bolt's respond() / say() and chat_postEphemeral."""
    return {"attachments": [to_attachment(response)]}
