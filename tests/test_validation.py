import pytest

from validation import ValidationError, normalize_title


@pytest.mark.parametrize("raw", ["", "   ", "\n", " \t\n  "])
def test_blank_titles_rejected(raw):
    with pytest.raises(ValidationError):
        normalize_title(raw)


def test_title_trimmed_including_newlines():
    assert normalize_title("\n  Write report  \n") == "Write report"


def test_inner_whitespace_kept():
    assert normalize_title(" a  b ") == "a  b"


def test_non_text_rejected():
    with pytest.raises(ValidationError):
        normalize_title(None)


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)
