from pathlib import Path
from typing import Any, Generator, Mapping

import httpx
import pytest

from graph_transport._config import reset_config
from graph_transport._http._pipeline import RequestEnv


@pytest.fixture(autouse=True)
def clean_config() -> Generator[None, None, None]:
    """Restore the process-wide transport config around each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def graph_url() -> str:
    return "https://graph.facebook.com"


@pytest.fixture
def png_bytes() -> bytes:
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    file_path = tmp_path / "cat.png"
    file_path.write_bytes(png_bytes)
    return file_path


class RecordingAdapter:
    """Adapter double that records what reaches it instead of sending."""

    instances: list["RecordingAdapter"] = []

    def __init__(self, options: Mapping[str, Any]) -> None:
        self.options = dict(options)
        self.envs: list[RequestEnv] = []
        self.closed = False
        RecordingAdapter.instances.append(self)

    def __call__(self, env: RequestEnv) -> httpx.Response:
        self.envs.append(env)
        return httpx.Response(
            201, text='{"id":"1"}', headers={"X-FB-Trace-Id": "abc"}
        )

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def recording_adapter() -> Generator[type[RecordingAdapter], None, None]:
    RecordingAdapter.instances = []
    yield RecordingAdapter
    RecordingAdapter.instances = []
