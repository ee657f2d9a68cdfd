"""Test the ordered analyzer registry.

This module tests:
- Registration order is preserved
- Logger injection for logger-aware analyzers
- Contract validation and duplicate-name permissiveness
"""

import logging

import pytest

from scrutinizer.analyzers.protocol import AnalyzerConfig, default_configuration
from scrutinizer.core.registry import AnalyzerRegistry

# ============================================================================
# Mock Analyzer Classes for Testing
# ============================================================================


class MockConfig(AnalyzerConfig):
    """Mock config."""

    threshold: int = 10


class MockAnalyzer:
    """Mock analyzer without logger support."""

    description = "Mock analyzer"
    config_class = MockConfig

    def __init__(self, name: str):
        self.name = name

    def scrutinize(self, project):
        pass


class LoggingAnalyzer(MockAnalyzer):
    """Mock analyzer that accepts a logger."""

    def __init__(self, name: str):
        super().__init__(name)
        self.logger = None

    def set_logger(self, logger):
        self.logger = logger


class NoConfigAnalyzer:
    """Broken analyzer: no config_class."""

    name = "broken"

    def scrutinize(self, project):
        pass


class NoScrutinizeAnalyzer:
    """Broken analyzer: no entry point."""

    name = "broken"
    config_class = MockConfig


# ============================================================================
# Test Cases
# ============================================================================


class TestAnalyzerRegistry:
    """Test registry ordering and lookups."""

    def test_registration_order_preserved(self):
        """get_all() yields analyzers in exact registration order."""
        registry = AnalyzerRegistry()
        analyzers = [MockAnalyzer(name) for name in ["zeta", "alpha", "mid", "beta"]]
        for analyzer in analyzers:
            registry.register(analyzer)

        assert list(registry.get_all()) == analyzers
        assert registry.get_all_names() == ["zeta", "alpha", "mid", "beta"]

    def test_constructor_registers_in_order(self):
        """Analyzers passed to the constructor are registered in order."""
        analyzers = [MockAnalyzer("b"), MockAnalyzer("a")]
        registry = AnalyzerRegistry(analyzers)

        assert list(registry.get_all()) == analyzers
        assert len(registry) == 2

    def test_get_all_is_read_only_view(self):
        """Mutating the returned view doesn't change the registry."""
        registry = AnalyzerRegistry([MockAnalyzer("a")])
        view = registry.get_all()

        assert isinstance(view, tuple)
        registry.register(MockAnalyzer("b"))
        assert len(view) == 1
        assert len(registry.get_all()) == 2

    def test_duplicate_names_allowed(self):
        """Two analyzers with the same name are two independent entries."""
        registry = AnalyzerRegistry()
        first = MockAnalyzer("dup")
        second = MockAnalyzer("dup")
        registry.register(first)
        registry.register(second)

        assert registry.get_all() == (first, second)
        assert registry.get("dup") is second

    def test_get_unknown(self):
        """Unknown names return None."""
        assert AnalyzerRegistry().get("missing") is None

    def test_logger_injected_at_registration(self):
        """Logger-aware analyzers receive the registry's logger immediately."""
        log = logging.getLogger("test.registry")
        registry = AnalyzerRegistry(logger=log)
        analyzer = LoggingAnalyzer("logging")

        registry.register(analyzer)

        assert analyzer.logger is log

    def test_plain_analyzer_untouched(self):
        """Analyzers without set_logger are registered as-is."""
        analyzer = MockAnalyzer("plain")
        AnalyzerRegistry(logger=logging.getLogger("test.registry")).register(analyzer)

        assert not hasattr(analyzer, "logger")

    @pytest.mark.parametrize("analyzer", [NoConfigAnalyzer(), NoScrutinizeAnalyzer()])
    def test_contract_validated(self, analyzer):
        """Objects missing the analyzer contract are rejected."""
        with pytest.raises(TypeError):
            AnalyzerRegistry().register(analyzer)

    def test_default_configuration(self):
        """The declared schema's defaults are the default configuration."""
        config = default_configuration(MockAnalyzer("a"))

        assert config.enabled is True
        assert config.threshold == 10
