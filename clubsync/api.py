"""
HTTP routes for the club directory import, served with aiohttp.
"""
import os
import sys
from typing import Optional
from aiohttp import web
from loguru import logger

from clubsync.club_json_import import import_clubs_from_json
from clubsync.config import (
    API_HOST,
    API_PORT,
    CLUBS_CSV,
    LOG_LEVEL,
    LOG_POLL_INTERVAL,
    LOG_SESSION_TTL,
    ZONES_CSV,
)
from clubsync.import_session import ImportSession
from clubsync.session_logs import SessionLogStore, stream_session_logs
from clubsync.stores import ClubStore, CsvClubStore

STORE_KEY = web.AppKey("store", ClubStore)
LOG_STORE_KEY = web.AppKey("log_store", SessionLogStore)
STREAM_SETTINGS_KEY = web.AppKey("stream_settings", dict)

IMPORT_PATH = "/api/admin/import-pca-data"
CLUB_IMPORT_PATH = "/api/admin/clubs/import"


def _bad_request(message: str) -> web.Response:
    return web.json_response({"success": False, "error": message}, status=400)


async def handle_import(request: web.Request) -> web.Response:
    """Preview or apply a club directory JSON dump."""
    try:
        body = await request.json()
    except ValueError:
        return _bad_request("Request body must be JSON")
    if not isinstance(body, dict):
        return _bad_request("Request body must be a JSON object")

    json_content = body.get("jsonContent")
    mode = body.get("mode")
    selected = body.get("selectedMatches")
    if not json_content or not isinstance(json_content, str):
        return _bad_request("JSON content is required")

    session_id = body.get("logSessionId")
    log_store = request.app[LOG_STORE_KEY]
    log_store.expire()
    session = ImportSession(
        request.app[STORE_KEY],
        log_store=log_store,
        session_id=str(session_id) if session_id is not None else None,
    )

    if mode == "preview":
        result = await session.run_preview(json_content)
    elif mode == "import" and isinstance(selected, list):
        result = await session.run_apply(json_content, [str(s) for s in selected])
    else:
        return _bad_request("Invalid request parameters")

    return web.json_response(result.to_dict(), status=200 if result.success else 500)


async def handle_log_stream(request: web.Request) -> web.StreamResponse:
    """Stream a session's progress lines as server-sent events."""
    session_id = request.query.get("logSessionId")
    if not session_id:
        return web.Response(text="Missing logSessionId", status=400)

    response = web.StreamResponse(
        headers={
            "Content-Type": "text/event-stream",
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        }
    )
    await response.prepare(request)
    settings = request.app[STREAM_SETTINGS_KEY]
    async for frame in stream_session_logs(request.app[LOG_STORE_KEY], session_id, **settings):
        await response.write(frame.encode("utf-8"))
    await response.write_eof()
    return response


async def handle_club_import(request: web.Request) -> web.Response:
    """Add new clubs from the platform's club JSON export."""
    try:
        body = await request.json()
    except ValueError:
        return _bad_request("Request body must be JSON")

    clubs = body.get("clubs") if isinstance(body, dict) else body
    if not isinstance(clubs, list) or not all(isinstance(c, dict) for c in clubs):
        return _bad_request("Expected a list of club objects")

    report = await import_clubs_from_json(clubs, request.app[STORE_KEY])
    return web.json_response({"success": True, **report.to_dict()})


def create_app(
    store: ClubStore,
    log_store: Optional[SessionLogStore] = None,
    poll_interval: float = LOG_POLL_INTERVAL,
    stream_duration: float = LOG_SESSION_TTL,
) -> web.Application:
    app = web.Application()
    app[STORE_KEY] = store
    app[LOG_STORE_KEY] = log_store or SessionLogStore()
    app[STREAM_SETTINGS_KEY] = {"poll_interval": poll_interval, "duration": stream_duration}
    app.router.add_post(IMPORT_PATH, handle_import)
    app.router.add_get(IMPORT_PATH, handle_log_stream)
    app.router.add_post(CLUB_IMPORT_PATH, handle_club_import)
    return app


def main():
    logger.remove()
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")
    store = CsvClubStore(CLUBS_CSV, ZONES_CSV if os.path.exists(ZONES_CSV) else None)
    web.run_app(create_app(store), host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
