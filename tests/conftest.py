import io

import pytest
import pytest_asyncio
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.agents.llm_provider import LLMProvider
from app.models import Base

PLASTIC_REPLY = '{"wasteType":"plastic","quantity":"2kg","confidence":0.87}'


class FakeLLM(LLMProvider):
    """Scripted model client. Records every call it receives."""

    def __init__(self, reply: str = PLASTIC_REPLY, error: Exception | None = None, gate=None):
        self.reply = reply
        self.error = error
        self.gate = gate  # optional asyncio.Event to hold the call open
        self.calls: list[dict] = []

    async def analyze_image(self, prompt: str, mime_type: str, b64_data: str) -> str:
        self.calls.append({"prompt": prompt, "mime_type": mime_type, "b64_data": b64_data})
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def make_llm():
    return FakeLLM


@pytest.fixture
def png_bytes():
    """Small PNG of a solid green square."""
    img = Image.new("RGB", (64, 48), color=(34, 139, 34))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()
