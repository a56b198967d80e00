from birthwheel.i18n import _STRINGS, t


def test_every_key_has_both_languages() -> None:
    for key, entry in _STRINGS.items():
        assert entry.get("en"), key
        assert entry.get("ko"), key


def test_lookup_and_fallbacks() -> None:
    assert t("svg_btn_save", "ko") == "저장"
    assert t("svg_btn_save", "fr") == "Save"
    assert t("no_such_key", "en") == "no_such_key"


def test_error_template_formats() -> None:
    assert t("error_unexpected", "en").format(error="boom") == "Unexpected error (boom)"
