from pinsweep.search.models import PasscodeRange


def partition_space(
    space_size: int, partition_count: int, width: int
) -> list[PasscodeRange]:
    """Split candidates 0..space_size-1 into contiguous, disjoint ranges.

    Every range holds space_size // partition_count candidates; when the
    division is not exact the last range absorbs the remainder.

    Raises:
        ValueError: if partition_count is outside 1..space_size, or if
            space_size does not fit in width digits.
    """
    if not 1 <= partition_count <= space_size:
        raise ValueError(
            f"partition_count must be between 1 and {space_size}, got {partition_count}"
        )
    if space_size > 10**width:
        raise ValueError(f"space_size {space_size} does not fit in {width} digits")

    size = space_size // partition_count
    ranges = []
    for index in range(partition_count):
        start = index * size
        end = space_size - 1 if index == partition_count - 1 else start + size - 1
        ranges.append(
            PasscodeRange(
                index=index,
                range_from=str(start).zfill(width),
                range_to=str(end).zfill(width),
            )
        )
    return ranges
