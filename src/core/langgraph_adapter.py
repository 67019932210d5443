
from typing import Any, AsyncIterator, Dict, Mapping, Optional
from core.domain import TokenEvent


def _extract_text(data: Mapping[str, Any]) -> Optional[str]:
    ch = data.get('chunk')
    if isinstance(ch, str):
        return ch or None

    text = getattr(ch, 'content', None)
    return text if isinstance(text, str) and text else None


async def adapt_events(stream: AsyncIterator[Dict[str, Any]]) -> AsyncIterator[TokenEvent]:
    """
    Turn langchain astream_events (v2) into token events.
    """
    async for ev in stream:
        if ev.get('event') != 'on_chat_model_stream':
            continue

        text = _extract_text(ev.get('data') or {})
        if text:
            yield {'type': 'token', 'text': text}


async def collect_reply(stream: AsyncIterator[Dict[str, Any]]) -> str:
    parts: list[str] = []
    async for ev in adapt_events(stream):
        parts.append(ev['text'])
    return ''.join(parts)
