from __future__ import annotations

import pytest

from translatable.config import TranslatableSettings, default_settings
from translatable.errors import ConfigError


def test_valid_settings_pass_and_keep_values(settings_factory) -> None:
    cfg = settings_factory().ensure_valid()
    assert cfg.allowed_types == ["posts", "articles"]
    assert cfg.pagination_limit == 20
    assert cfg.max_pagination_limit == 100
    assert cfg.max_content_length == 10240


@pytest.mark.parametrize(
    ("allowed", "message"),
    [
        ([], "allowed_types cannot be empty"),
        (["posts", ""], "allowed_types cannot contain empty strings"),
        (["posts", "posts"], "duplicate type in allowed_types: posts"),
    ],
)
def test_allowed_types_rejected(settings_factory, allowed, message) -> None:
    with pytest.raises(ConfigError) as exc_info:
        settings_factory(allowed_types=allowed).ensure_valid()
    assert exc_info.value.message == message


@pytest.mark.parametrize(
    ("locales", "message"),
    [
        ([], "supported_locales cannot be empty"),
        (["en", ""], "supported_locales cannot contain empty strings"),
        (["en", "fr", "en"], "duplicate locale in supported_locales: en"),
    ],
)
def test_supported_locales_rejected(settings_factory, locales, message) -> None:
    with pytest.raises(ConfigError) as exc_info:
        settings_factory(supported_locales=locales).ensure_valid()
    assert exc_info.value.message == message


def test_default_locale_must_be_supported(settings_factory) -> None:
    with pytest.raises(ConfigError, match="default_locale must be one of"):
        settings_factory(default_locale="de").ensure_valid()
    with pytest.raises(ConfigError, match="default_locale cannot be empty"):
        settings_factory(default_locale="").ensure_valid()
    assert settings_factory(default_locale="fr").ensure_valid().default_locale == "fr"


def test_unset_limits_get_defaults(settings_factory) -> None:
    cfg = settings_factory(
        pagination_limit=None,
        max_pagination_limit=0,
        max_content_length=-5,
    ).ensure_valid()
    assert cfg.pagination_limit == 20
    assert cfg.max_pagination_limit == 100
    assert cfg.max_content_length == 10240


def test_max_content_length_upper_bound(settings_factory) -> None:
    assert settings_factory(max_content_length=1048576).ensure_valid()
    with pytest.raises(ConfigError, match="max_content_length must be between"):
        settings_factory(max_content_length=1048577).ensure_valid()


def test_locale_less_mode_skips_locale_checks(settings_factory) -> None:
    cfg = settings_factory(
        locale_aware=False, supported_locales=[], default_locale=""
    ).ensure_valid()
    assert cfg.locale_aware is False


def test_membership_is_exact_and_case_sensitive(settings: TranslatableSettings) -> None:
    assert settings.is_allowed_type("posts")
    assert not settings.is_allowed_type("Posts")
    assert not settings.is_allowed_type("")
    assert settings.is_supported_locale("fr")
    assert not settings.is_supported_locale("FR")
    assert not settings.is_supported_locale("")


def test_lists_parsed_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("TRANSLATABLE_ALLOWED_TYPES", "posts, products")
    monkeypatch.setenv("TRANSLATABLE_SUPPORTED_LOCALES", '["en", "de"]')
    monkeypatch.setenv("TRANSLATABLE_DEFAULT_LOCALE", "de")
    cfg = TranslatableSettings(_env_file=None).ensure_valid()
    assert cfg.allowed_types == ["posts", "products"]
    assert cfg.supported_locales == ["en", "de"]
    assert cfg.default_locale == "de"


def test_default_settings_are_valid() -> None:
    cfg = default_settings().ensure_valid()
    assert cfg.allowed_types == ["post"]
    assert cfg.supported_locales == ["en", "fr", "es"]
    assert cfg.default_locale == "en"
