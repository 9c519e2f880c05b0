"""Shared pytest fixtures for richcopy tests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from richcopy import _HANDLER_MARKER
from richcopy.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator

# Homepage collection copy as authored in the storefront back office.
HOMEPAGE_COPY = """\
## [color=#B0041A]BỘ SƯU TẬP TRUNG THU 2025[/color]:
### _[color=#FFC300]THIÊN HƯƠNG NGUYỆT DẠ[/color]_

Kính chào Quý doanh nghiệp và quý khách hàng,

- [Khổng Tước Hướng Nguyệt](https://example.com/)
- [Thiên Cầu Vượng Khí](https://example.com/)

Chúng tôi tin rằng, với bộ sưu tập **[color=#B0041A]THIÊN HƯƠNG NGUYỆT DẠ[/color]**, \
quý khách hàng sẽ có những giây phút thưởng thức trọn vẹn.
"""


@pytest.fixture
def homepage_copy() -> str:
    return HOMEPAGE_COPY


@pytest.fixture(autouse=True)
def _reset_settings_and_logging() -> Iterator[None]:
    """Isolate cached settings and handlers installed by setup_logging()."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()
