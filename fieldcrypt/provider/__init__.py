"""
Field encryption providers.

The framework picks a provider by name and passes it the configured options:

    >>> provider = get_provider("aes_new", key="passphrase", salt="salt")
    >>> provider.decrypt(provider.encrypt("secret"))
    'secret'
"""

from typing import Dict, List

from ..errors import ConfigError
from .aes_new import AesNewProvider, FieldCipher
from .search import search

_PROVIDERS: Dict[str, type] = {
    AesNewProvider.name: AesNewProvider,
}


def register_provider(name: str, provider_cls: type) -> None:
    """
    Register a provider class under a name.

    The class must offer a from_options(options) classmethod.
    """
    if not name:
        raise ConfigError("Provider name must not be empty")
    _PROVIDERS[name] = provider_cls


def available_providers() -> List[str]:
    """List registered provider names."""
    return sorted(_PROVIDERS)


def get_provider(name: str, **options):
    """
    Construct a registered provider.

    Raises:
        ConfigError: If the name is unknown or the options are invalid
    """
    try:
        provider_cls = _PROVIDERS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown provider {name!r}, expected one of: {', '.join(available_providers())}"
        )
    return provider_cls.from_options(options)


__all__ = [
    'AesNewProvider',
    'FieldCipher',
    'search',
    'register_provider',
    'available_providers',
    'get_provider',
]
