"""Minimization settings."""

from dataclasses import dataclass
from typing import Optional

from .cover import CoverMode
from .sharing import SharingStrategy


@dataclass
class MinimizationConfig:
    """
    Settings for a minimization run.

    Attributes:
        mode: Cover selection after essential implicants (greedy or exact)
        sharing: Cross-output sharing strategy applied after all outputs finish
        max_implicants: Ceiling on cubes created per output, None for no limit
        max_merge_steps: Ceiling on pair comparisons per output
        exact_max_implicants: Above this many candidates exact mode falls back
            to greedy
        workers: Processes used to minimize outputs; 1 runs in-process
        verify: Re-evaluate the result against every table row
    """

    mode: CoverMode = CoverMode.GREEDY
    sharing: SharingStrategy = SharingStrategy.NONE
    max_implicants: Optional[int] = 200_000
    max_merge_steps: Optional[int] = 50_000_000
    exact_max_implicants: Optional[int] = 64
    workers: int = 1
    verify: bool = True
