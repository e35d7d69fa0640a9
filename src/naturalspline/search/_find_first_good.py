"""Batched binary search over a monotonic predicate."""

from typing import Callable, Optional, Sequence, Union

import torch
from torch import Tensor


def find_first_good(
    high: int,
    good: Callable[[Tensor], Tensor],
    shape: Sequence[int] = (),
    device: Optional[Union[torch.device, str]] = None,
) -> Tensor:
    """
    Find the first index at which a monotonic predicate holds.

    ``good`` is defined on the integers ``0, ..., high - 1`` and looks like
    ``[False, ..., False, True, ..., True]`` (either run may be empty).
    The returned index ``i`` satisfies

        (i == 0 or not good(i - 1)) and (i == high or good(i))

    so ``i == high`` means ``good`` never holds.

    Many independent searches over the same range run at once: ``good``
    receives a long tensor of candidate indices with shape ``shape`` and
    returns a bool tensor of the same shape, one answer per search.

    Parameters
    ----------
    high : int
        Exclusive upper bound of the predicate's domain.
    good : Callable[[Tensor], Tensor]
        Elementwise monotonic predicate on index tensors.
    shape : sequence of int
        Shape of the batch of searches. Default is a single search.
    device : torch.device or str, optional
        Device of the index tensors.

    Returns
    -------
    Tensor
        The first good index of every search, long tensor of shape
        ``shape`` with values in ``[0, high]``.

    Raises
    ------
    ValueError
        If ``high`` is negative.

    Notes
    -----
    Every search halves its interval on each step, so ``good`` is called
    at most ceil(log2(high + 1)) times and only with indices in
    ``[0, high)``.
    With ``good = lambda i: a[i] >= v`` over a sorted tensor ``a`` this is
    a lower-bound search, the same as ``torch.searchsorted(a, v)``.

    Examples
    --------
    >>> find_first_good(5, lambda i: i >= 3)
    tensor(3)
    >>> values = torch.tensor([1.0, 2.0, 2.0, 5.0])
    >>> targets = torch.tensor([0.5, 2.0, 6.0])
    >>> find_first_good(4, lambda i: values[i] >= targets, targets.shape)
    tensor([0, 1, 4])
    """
    if high < 0:
        raise ValueError(f"high must be non-negative, got {high}")

    low = torch.zeros(tuple(shape), dtype=torch.long, device=device)
    upper = torch.full(tuple(shape), high, dtype=torch.long, device=device)

    active = low < upper
    while torch.any(active):
        # Finished searches still pass an in-range index to the predicate.
        middle = torch.clamp((low + upper) >> 1, max=high - 1)
        is_good = good(middle)

        upper = torch.where(active & is_good, middle, upper)
        low = torch.where(active & ~is_good, middle + 1, low)
        active = low < upper

    return low
