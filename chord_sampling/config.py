"""Consolidated configuration for the chord sampling engine.

This module provides a type-safe, validated configuration structure using
dataclasses. The outer optimizer selects exactly one sampler variant and, for
the oracle-guided samplers, exactly one oracle variant here.

The configuration is organized hierarchically:
    SamplingConfig (root)
    ├── OracleConfig
    ├── ExponentialConfig
    ├── PossibleConfig
    ├── UncertainConfig
    └── TrackingConfig

Usage:
    >>> from chord_sampling.config import SamplingConfig
    >>> config = SamplingConfig()  # Uncertain sampler, single oracle
    >>> config.validate()

    >>> # Or customize
    >>> config = SamplingConfig(
    ...     sampler='possible',
    ...     oracle=OracleConfig(variant='ensemble'),
    ...     possible=PossibleConfig(max_attempts=10000)
    ... )
"""

from dataclasses import dataclass, field
from typing import Optional


# Number of estimators in every ensemble oracle
NUM_ENSEMBLE = 5

SAMPLER_VARIANTS = ('exponential', 'possible', 'uncertain')
ORACLE_VARIANTS = ('single', 'ensemble')


# ==============================================================================
# ORACLE CONFIGURATION
# ==============================================================================

@dataclass
class OracleConfig:
    """Feasibility oracle selection.

    Attributes:
        variant: 'single' (one estimator) or 'ensemble' (mean of several)
        ensemble_size: Number of estimators an ensemble oracle must hold
    """
    variant: str = 'single'
    ensemble_size: int = NUM_ENSEMBLE

    def validate(self):
        """Validate oracle configuration."""
        assert self.variant in ORACLE_VARIANTS, \
            f"oracle variant must be one of {ORACLE_VARIANTS}"
        assert self.ensemble_size > 0, "ensemble_size must be positive"


# ==============================================================================
# SAMPLER CONFIGURATION
# ==============================================================================

@dataclass
class ExponentialConfig:
    """Incremental chord construction parameters.

    At every step the sampler keeps adding a random legal key with
    probability continue_probability, so chord size is roughly geometric.

    Attributes:
        continue_probability: Probability of adding another key (0 < p < 1)
    """
    continue_probability: float = 0.6

    def validate(self):
        """Validate exponential sampler configuration."""
        assert 0 < self.continue_probability < 1, \
            "continue_probability must be in (0, 1)"


@dataclass
class PossibleConfig:
    """Rejection sampler parameters.

    Attributes:
        max_attempts: Maximum draws per emitted chord (None = unbounded)
    """
    max_attempts: Optional[int] = None

    def validate(self):
        """Validate rejection sampler configuration."""
        if self.max_attempts is not None:
            assert self.max_attempts > 0, "max_attempts must be positive"


@dataclass
class UncertainConfig:
    """Uncertainty-ranked sampler parameters.

    Attributes:
        boundary_threshold: Probability separating likely-possible chords
            from the rest when computing the boundary index
        max_chords: Largest legal chord set that may be enumerated and scored
    """
    boundary_threshold: float = 0.5
    max_chords: int = 2 ** 16

    def validate(self):
        """Validate uncertain sampler configuration."""
        assert 0 <= self.boundary_threshold <= 1, \
            "boundary_threshold must be in [0, 1]"
        assert self.max_chords > 0, "max_chords must be positive"


# ==============================================================================
# TRACKING CONFIGURATION
# ==============================================================================

@dataclass
class TrackingConfig:
    """Logging configuration.

    Attributes:
        log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        log_to_file: Whether to log to file in addition to stdout
        log_directory: Directory for log files
    """
    log_level: str = 'INFO'
    log_to_file: bool = False
    log_directory: str = 'logs'

    def validate(self):
        """Validate tracking configuration."""
        assert self.log_level in ['DEBUG', 'INFO', 'WARNING', 'ERROR'], \
            "log_level must be DEBUG, INFO, WARNING, or ERROR"


# ==============================================================================
# ROOT CONFIGURATION
# ==============================================================================

@dataclass
class SamplingConfig:
    """Complete chord sampling configuration.

    Root configuration object selecting the sampler and oracle variants and
    holding every variant's parameters. Create an instance and call
    validate() before use.

    Attributes:
        random_state: Seed for the sampler's random source
        sampler: Sampler variant ('exponential', 'possible' or 'uncertain')
        oracle: Oracle selection (ignored by the exponential sampler)
        exponential: Exponential sampler configuration
        possible: Rejection sampler configuration
        uncertain: Uncertainty-ranked sampler configuration
        tracking: Logging configuration

    Example:
        >>> config = SamplingConfig(sampler='exponential')
        >>> config.validate()
        >>> config.uses_oracle
        False
    """
    random_state: int = 315
    sampler: str = 'uncertain'
    oracle: OracleConfig = field(default_factory=OracleConfig)
    exponential: ExponentialConfig = field(default_factory=ExponentialConfig)
    possible: PossibleConfig = field(default_factory=PossibleConfig)
    uncertain: UncertainConfig = field(default_factory=UncertainConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)

    @property
    def uses_oracle(self) -> bool:
        """Whether the selected sampler needs a feasibility oracle."""
        return self.sampler != 'exponential'

    def validate(self):
        """Validate entire configuration hierarchy.

        Raises:
            AssertionError: If any configuration parameter is invalid
        """
        assert self.sampler in SAMPLER_VARIANTS, \
            f"sampler must be one of {SAMPLER_VARIANTS}"
        self.oracle.validate()
        self.exponential.validate()
        self.possible.validate()
        self.uncertain.validate()
        self.tracking.validate()

    def summary(self) -> str:
        """Generate human-readable configuration summary.

        Returns:
            Multi-line string describing the selected variants
        """
        lines = [
            "Chord Sampling Configuration:",
            f"  Random State: {self.random_state}",
            f"  Sampler: {self.sampler}",
        ]
        if self.sampler == 'exponential':
            lines.append(
                f"    continue_probability={self.exponential.continue_probability}"
            )
        elif self.sampler == 'possible':
            lines.append(f"    max_attempts={self.possible.max_attempts}")
        else:
            lines.append(
                f"    boundary_threshold={self.uncertain.boundary_threshold}, "
                f"max_chords={self.uncertain.max_chords}"
            )
        if self.uses_oracle:
            oracle = self.oracle.variant
            if oracle == 'ensemble':
                oracle += f" ({self.oracle.ensemble_size} estimators)"
            lines.append(f"  Oracle: {oracle}")
        return "\n".join(lines)
