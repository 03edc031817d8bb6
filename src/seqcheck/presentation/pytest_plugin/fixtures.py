"""pytest fixtures for call-order verification.

Provides a fresh QueryContext per test, so recording windows of parallel
or interleaved tests never share state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from seqcheck.application.query.context import QueryContext
from seqcheck.domain.model.configuration import VerificationConfig
from seqcheck.domain.model.enums import LengthPolicy
from seqcheck.infrastructure.substitute import Substitute

if TYPE_CHECKING:
    from collections.abc import Callable


def _get_ini_value(config: pytest.Config, name: str, default: str) -> str:
    """Get ini value from pytest config with fallback.

    Args:
        config: pytest Config object
        name: ini option name
        default: default value if not set

    Returns:
        String value of ini option
    """
    value = config.getini(name)
    if value:
        return str(value)
    return default


def build_config(config: pytest.Config) -> VerificationConfig:
    """VerificationConfig from ini options.

    pytest.fail() is recognized as an assertion failure in addition to
    AssertionError.

    Raises:
        ValueError: Invalid ini value.
    """
    policy_raw = _get_ini_value(config, "seqcheck_length_policy", LengthPolicy.PREFIX.value)
    try:
        policy = LengthPolicy(policy_raw.strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in LengthPolicy)
        raise ValueError(f"seqcheck_length_policy must be one of {choices}, got {policy_raw!r}") from None

    max_length_raw = _get_ini_value(config, "seqcheck_max_argument_length", "").strip()
    max_length = int(max_length_raw) if max_length_raw else None

    return VerificationConfig(
        failure_types=(AssertionError, pytest.fail.Exception),
        length_policy=policy,
        max_argument_length=max_length,
    )


@pytest.fixture(scope="session")
def seqcheck_config(request: pytest.FixtureRequest) -> VerificationConfig:
    """Verification configuration read from pytest.ini / pyproject.toml.

    Override in conftest.py to configure programmatically.
    """
    return build_config(request.config)


@pytest.fixture
def seqcheck_context(seqcheck_config: VerificationConfig) -> QueryContext:
    """Fresh QueryContext for one test."""
    return QueryContext(seqcheck_config)


@pytest.fixture
def substitute(seqcheck_context: QueryContext) -> Callable[..., Substitute]:
    """Factory for substitutes bound to this test's context.

    Usage:
        def test_flow(substitute, seqcheck_context):
            repo = substitute(Repository)
            ...
            received_in_order(lambda: repo.save(1), seqcheck_context)
    """

    def _make(spec: type | None = None, *, name: str | None = None) -> Substitute:
        return Substitute(spec, name=name, context=seqcheck_context)

    return _make
