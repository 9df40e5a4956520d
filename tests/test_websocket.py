"""WebSocket post event feed tests."""

import asyncio
import logging


def test_forwards_post_events(client, notifier):
    """Test that notifier events reach the connected client."""
    event = {"action": "create", "post": {"_id": "1", "title": "Hello world"}}

    async def listen():
        yield event
        # Stay subscribed until the client goes away
        await asyncio.Event().wait()

    notifier.listen = listen

    with client.websocket_connect("/ws/posts") as websocket:
        assert websocket.receive_json() == {"type": "posts", **event}


def test_stream_failure_is_logged(client, notifier, caplog):
    """Test that a broken event stream is reported instead of dropped."""

    async def listen():
        raise ConnectionError("Redis connection failed")
        yield

    notifier.listen = listen

    with caplog.at_level(logging.ERROR, logger="blog_api.api.websocket"):
        with client.websocket_connect("/ws/posts"):
            pass

    assert any("Redis connection failed" in record.getMessage() for record in caplog.records)
