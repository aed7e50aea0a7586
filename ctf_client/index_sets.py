from typing import List


def get_index_sets(outcome_slot_count: int) -> List[int]:
    """
    Maximal partition of a condition: one single-outcome bitmask per slot.

    Redeeming with this partition pays out every outcome position held
    in a single transaction.
    """
    return [1 << i for i in range(outcome_slot_count)]
