"""Sampler variant selection.

The outer optimizer fixes one sampler variant (and, where needed, one oracle)
at configuration time and then only ever calls sample_chord().
"""

import logging
from typing import Iterator, List, Optional, Protocol, Union

from chord_sampling.config import SamplingConfig
from chord_sampling.layout import Layout
from chord_sampling.oracle import FeasibilityOracle
from chord_sampling.samplers.exponential import ExponentialSampler
from chord_sampling.samplers.possible import PossibleSampler
from chord_sampling.samplers.uncertain import UncertainSampler
from chord_sampling.tracking import get_logger
from chord_sampling.utils import Chord


class ChordSampler(Protocol):
    """Interface shared by all sampler variants."""

    def sample_chord(self, context=None) -> Chord:
        ...

    def sample(self, n: int, context=None) -> List[Chord]:
        ...

    def __iter__(self) -> Iterator[Chord]:
        ...


def build_sampler(
    config: SamplingConfig,
    layout: Layout,
    oracle: Optional[FeasibilityOracle] = None,
    logger: Optional[logging.Logger] = None
) -> Union[ExponentialSampler, PossibleSampler, UncertainSampler]:
    """Build the sampler variant selected in the configuration.

    Parameters
    ----------
    config : SamplingConfig
        Root configuration; config.sampler picks the variant and
        config.random_state seeds its random source.
    layout : Layout
        Validity predicate shared with the caller.
    oracle : FeasibilityOracle, optional
        Required by the possible and uncertain samplers, refused by the
        exponential sampler.
    logger : logging.Logger, optional
        Defaults to the package logger.

    Returns
    -------
    sampler : ExponentialSampler, PossibleSampler or UncertainSampler

    Raises
    ------
    ValueError
        If the oracle does not match the variant's needs.
    """
    config.validate()
    logger = logger if logger is not None else get_logger()

    if config.uses_oracle and oracle is None:
        raise ValueError(f"The {config.sampler} sampler requires an oracle")
    if not config.uses_oracle and oracle is not None:
        raise ValueError("The exponential sampler does not use an oracle")

    logger.info(config.summary())

    if config.sampler == 'exponential':
        return ExponentialSampler(
            layout, config.random_state, config=config.exponential, logger=logger
        )
    if config.sampler == 'possible':
        return PossibleSampler(
            layout, oracle, config.random_state, config=config.possible, logger=logger
        )
    return UncertainSampler(
        layout, oracle, config.random_state, config=config.uncertain, logger=logger
    )
