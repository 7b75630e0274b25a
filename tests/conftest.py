from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, LayoutSettings


def _clear_layout_env() -> None:
    for key in list(os.environ):
        if key.startswith("CAL_LAYOUT_"):
            os.environ.pop(key, None)


_clear_layout_env()


@pytest.fixture(autouse=True)
def clear_layout_env() -> Generator[None, None, None]:
    _clear_layout_env()
    yield
    _clear_layout_env()


@pytest.fixture
def layout_settings(tmp_path: Path) -> LayoutSettings:
    return LayoutSettings(
        container_width=600.0,
        input_dir=tmp_path / "events",
        output_dir=tmp_path / "layouts",
        log_level="WARNING",
    )


@pytest.fixture
def layout_settings_factory(
    layout_settings: LayoutSettings,
) -> Callable[..., LayoutSettings]:
    def _factory(**overrides: object) -> LayoutSettings:
        return layout_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(layout_settings: LayoutSettings) -> AppSettings:
    return AppSettings(layout=layout_settings)
