"""
HealthPulse — Вікові групи

Квартильне розбиття віку когорти (nearest-rank: index = floor(n * p)
у відсортованому масиві віків):

    [min, Q1], [Q1+1, Q2], [Q2+1, Q3], [Q3+1, max]

Якщо межі збігаються (багато однакових віків), група може бути "порожньою"
за шириною, це допустимо.
"""

import math
from typing import List, Sequence

import numpy as np

from health_pulse.schemas import AgeBracket, ClinicalRecord


def nearest_rank_quartiles(
    ages: Sequence[int],
    quartiles: Sequence[float] = (0.25, 0.5, 0.75)
) -> List[int]:
    """
    Межі вікових груп: [min, Q1, Q2, Q3, max].

    Args:
        ages: Вік кожного запису (порядок не важливий)
        quartiles: Частки для внутрішніх меж

    Returns:
        Список меж довжиною len(quartiles) + 2, або [] для порожньої когорти
    """
    if len(ages) == 0:
        return []

    sorted_ages = np.sort(np.asarray(ages, dtype=np.int64))
    n = len(sorted_ages)

    bounds = [int(sorted_ages[0])]
    for p in quartiles:
        idx = min(int(math.floor(n * p)), n - 1)
        bounds.append(int(sorted_ages[idx]))
    bounds.append(int(sorted_ages[-1]))

    return bounds


def build_age_brackets(
    records: Sequence[ClinicalRecord],
    quartiles: Sequence[float] = (0.25, 0.5, 0.75)
) -> List[AgeBracket]:
    """
    Побудувати вікові групи з апріорними лічильниками хвороб.

    Args:
        records: Записи когорти
        quartiles: Частки для внутрішніх меж

    Returns:
        Впорядковані за зростанням групи ([] для порожньої когорти)
    """
    bounds = nearest_rank_quartiles([r.age for r in records], quartiles)
    if not bounds:
        return []

    ranges = [(bounds[0], bounds[1])]
    for lower, upper in zip(bounds[1:-1], bounds[2:]):
        ranges.append((lower + 1, upper))

    # Один повторний прохід: кожен запис потрапляє не більше ніж в одну групу
    totals = [0] * len(ranges)
    priors = [{} for _ in ranges]

    for record in records:
        for i, (lower, upper) in enumerate(ranges):
            if lower <= record.age <= upper:
                totals[i] += 1
                priors[i][record.disease] = priors[i].get(record.disease, 0) + 1
                break

    return [
        AgeBracket(
            lower_bound=lower,
            upper_bound=upper,
            total_records=totals[i],
            disease_prior_count=priors[i],
        )
        for i, (lower, upper) in enumerate(ranges)
    ]
