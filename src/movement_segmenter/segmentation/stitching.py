"""
Stitching of chunks shorter than a minimum duration.

Each chunk at least ``min_length`` long gets an id of its own. A run of
consecutive short chunks is merged into one block whose id sits between
its neighbours' ids instead of being absorbed into the preceding long
chunk. After every long chunk the id advances once more to reserve the
block id for trailing short chunks, so ids that are never used are
skipped; only ordering and grouping of ids carry meaning.
"""

import logging
import numbers
from collections.abc import Sequence

import numpy as np

from ..exceptions import EmptyInputError, ValidationError
from ..models import Chunk, SegmentLabeling
from ..validation import require_int

logger = logging.getLogger(__name__)


def _chunk_length(chunk: Chunk | int) -> int:
    length = chunk.length if isinstance(chunk, Chunk) else chunk
    if (
        isinstance(length, bool)
        or not isinstance(length, numbers.Integral)
        or length < 1
    ):
        raise ValidationError(
            f"Chunk lengths must be positive integers, got {length!r}"
        )
    return int(length)


def stitch_short_chunks(
    chunks: Sequence[Chunk | int], min_length: int
) -> SegmentLabeling:
    """
    Merge runs of short chunks into single blocks between long chunks.

    Args:
        chunks: Chunks in temporal order, as Chunk objects or lengths
        min_length: Minimum length for a chunk to keep an id of its own

    Returns:
        Integer labeling whose length is the total length of the chunks.
        Leading short chunks are labeled 0.

    Raises:
        InvalidParameterError: If min_length < 1
        EmptyInputError: If no chunks are given
        ValidationError: If a chunk length is not a positive integer
    """
    min_length = require_int(min_length, "min_length", 1)
    lengths = [_chunk_length(chunk) for chunk in chunks]
    if not lengths:
        raise EmptyInputError("No chunks to stitch")

    ids = []
    segment_id = 0
    for length in lengths:
        if length >= min_length:
            segment_id += 1
            ids.append(segment_id)
            segment_id += 1
        else:
            ids.append(segment_id)

    n_long = sum(1 for length in lengths if length >= min_length)
    logger.debug(
        f"Stitched {len(lengths)} chunks: {n_long} kept, "
        f"{len(lengths) - n_long} merged (min_length={min_length})"
    )
    return np.repeat(np.asarray(ids, dtype=np.int64), lengths)
