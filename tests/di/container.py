"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, Provider, make_async_container

from dealspark.util.di import PROVIDERS, Component, get_provider


def build_test_container(
    unmock: set[Component] | None = None, *extra: Provider
) -> AsyncContainer:
    """Build test container with selective unmocking.

    Settings are loaded from environment variables; the defaults work for
    unit tests.

    Args:
        unmock: Components to use production implementations for.
                All others use mocks if available.
        *extra: Additional providers (e.g. FastapiProvider for HTTP tests)

    Returns:
        Configured test container

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # Unit tests - in-memory persistence
        container = build_test_container()

        # Integration tests - PostgreSQL (DATABASE__URL)
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        component_name = getattr(base, "__mock_component__", None)
        if component_name is None:
            # Concrete provider - always use as-is
            provider_class = get_provider(base, use_mock=False)
        else:
            provider_class = get_provider(base, use_mock=component_name not in unmock)

        # All providers instantiated without arguments (Settings comes from DI)
        provider_instances.append(provider_class())

    return make_async_container(*provider_instances, *extra)


def _validate_unmock(unmock: set[Component]) -> None:
    """Reject component names no provider declares.

    Raises:
        ValueError: If unknown components are requested
    """
    known = {
        getattr(p, "__mock_component__")
        for p in PROVIDERS
        if getattr(p, "__mock_component__", None) is not None
    }
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
