"""Partition a family's flat samples into per-label-set groups."""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Tuple

from promproto.accumulators import ParticleAccumulator, truncate_count
from promproto.floats import parse_label_float
from promproto.samples import Sample

logger = logging.getLogger(__name__)

GroupKey = Tuple[Tuple[str, ...], Tuple[str, ...]]


@dataclass
class Group:
    """One output series: its label shape and the accumulator feeding it."""
    label_names: List[str]
    label_values: List[str]
    accumulator: ParticleAccumulator


def group_samples(
    samples: Iterable[Sample],
    particle_label: str,
    accumulator_factory: Callable[[], ParticleAccumulator],
) -> Dict[GroupKey, Group]:
    """
    Bucket samples by label set, stripping ``particle_label`` from particle rows.

    ``_count`` and ``_sum`` rows are keyed by their full label set. Every other
    row must carry ``particle_label``; rows without it are dropped. Keys compare
    label names and values positionally, so the same labels in a different
    order form a different group.

    Args:
        samples: Flat samples of one family
        particle_label: ``quantile`` for summaries, ``le`` for histograms
        accumulator_factory: Creates the accumulator for a new group

    Returns:
        Groups in first-insertion order
    """
    groups: Dict[GroupKey, Group] = {}

    def group_for(names: List[str], values: List[str]) -> Group:
        key = (tuple(names), tuple(values))
        group = groups.get(key)
        if group is None:
            group = Group(names, values, accumulator_factory())
            groups[key] = group
        return group

    for sample in samples:
        if sample.name.endswith("_count"):
            group = group_for(list(sample.label_names), list(sample.label_values))
            group.accumulator.consume_sample_count(truncate_count(sample.value))
            continue

        if sample.name.endswith("_sum"):
            group = group_for(list(sample.label_names), list(sample.label_values))
            group.accumulator.consume_sample_sum(sample.value)
            continue

        try:
            position = sample.label_names.index(particle_label)
        except ValueError:
            logger.debug(f"Dropping sample {sample.name}: no '{particle_label}' label")
            continue

        names = list(sample.label_names)
        values = list(sample.label_values)
        del names[position]
        boundary = parse_label_float(values.pop(position))

        group_for(names, values).accumulator.consume_particle(boundary, sample.value)

    return groups
