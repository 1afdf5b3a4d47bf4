from unittest.mock import patch

import pytest

from genius_chat.exceptions import (
    AppleFMSetupError,
    GeniusChatError,
    describe_error,
    require_apple_fm,
)


def test_require_apple_fm_raises_with_install_hint():
    with (
        patch("genius_chat.exceptions.importlib.util.find_spec", return_value=None),
        pytest.raises(AppleFMSetupError, match=r"\[genius-chat gui\] 'apple_fm_sdk'"),
    ):
        require_apple_fm("genius-chat gui")


def test_require_apple_fm_passes_when_sdk_is_importable():
    with patch("genius_chat.exceptions.importlib.util.find_spec", return_value=object()):
        require_apple_fm("genius-chat")


def test_setup_error_hierarchy():
    assert issubclass(AppleFMSetupError, GeniusChatError)
    assert issubclass(AppleFMSetupError, RuntimeError)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (RuntimeError("  model busy  "), "model busy"),
        (TimeoutError(), "TimeoutError"),
        (ValueError(""), "ValueError"),
    ],
)
def test_describe_error(exc, expected):
    assert describe_error(exc) == expected
