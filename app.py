import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slack_bolt import App
from slack_bolt.adapter.fastapi import SlackRequestHandler
from slack_sdk.errors import SlackApiError

from repobot.logger import logger
from repobot.config import validate_environment_variables
from repobot.github_client import GitHubClient
from repobot.permissions import can_manage_server
from repobot.quick_ref import handle_quick_reference, parse_trigger
from repobot.repository import load_settings_quietly
from repobot.router import COMMANDS, build_context, dispatch
from repobot.slack_messages import to_message

# Validate environment variables at startup
validate_environment_variables()

# Slack app setup
slack_app = App(
    token=os.environ["SLACK_BOT_TOKEN"],
    signing_secret=os.environ["SLACK_SIGNING_SECRET"],
    # Listeners run in Bolt's thread pool; the HTTP response goes out as soon as ack() is called
    process_before_response=False,
)
github = GitHubClient.from_env()

fastapi_app = FastAPI()
handler = SlackRequestHandler(slack_app)


def handle_slash_command(ack, command, respond, client):
    # Acknowledge first so Slack gets its response within 3 seconds;
    # the answer goes out through the response_url
    ack()
    user_id = command.get("user_id")
    context = build_context(
        server_id=command.get("team_id"),
        github=github,
        can_manage_server=lambda: can_manage_server(client, user_id),
        server_name=command.get("team_domain"),
        user_id=user_id,
    )
    reply = dispatch(command["command"], command.get("text"), context)
    respond(
        response_type="ephemeral" if reply.ephemeral else "in_channel",
        **to_message(reply.response),
    )


for command_name in COMMANDS:
    slack_app.command(f"/{command_name}")(handle_slash_command)


# Quick references in plain channel messages
@slack_app.event("message")
def handle_message(event, say, client, body):
    # Edits, joins and bot posts carry a subtype or bot_id
    if event.get("subtype") or event.get("bot_id"):
        return

    text = event.get("text", "") or ""
    if parse_trigger(text) is None:
        return

    team_id = body.get("team_id") or event.get("team")
    settings = load_settings_quietly(team_id)
    response = handle_quick_reference(text, settings, github)
    if response is None:
        return

    if not response.error:
        say(**to_message(response))
        return

    # Failed lookups are only shown to the author
    try:
        client.chat_postEphemeral(channel=event["channel"], user=event["user"], **to_message(response))
    except SlackApiError as e:
        logger.warning("Could not notify user_id=%s about failed quick reference: %s", event.get("user"), e)


@fastapi_app.post("/slack/events")
async def slack_events(request: Request):
    # Delegate to Slack Bolt FastAPI handler
    return await handler.handle(request)


@fastapi_app.get("/")
async def ping():
    return JSONResponse({"status": "ok"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:fastapi_app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 3000)),
        reload=os.getenv("ENV") != "prod",
    )
