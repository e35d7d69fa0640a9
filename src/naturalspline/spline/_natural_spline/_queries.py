"""Helpers shared by the natural spline queries."""

from typing import Union

import torch
from torch import Tensor

from ...search import find_first_good


def locate(values: Tensor, target: Tensor) -> Tensor:
    """Return the first index i with values[i] >= target, or len(values).

    ``target`` is one-dimensional; the result holds one index per target.
    """
    return find_first_good(
        values.shape[0],
        lambda i: values[i] >= target,
        target.shape,
        device=target.device,
    )


def flatten_queries(
    t: Union[Tensor, float],
    like: Tensor,
) -> tuple[Tensor, torch.Size]:
    """Flatten queries into a 1-D tensor with the dtype and device of ``like``.

    Returns the flat queries and the shape to restore afterwards.
    """
    if not isinstance(t, Tensor):
        t = torch.tensor(float(t), dtype=like.dtype, device=like.device)
    t = t.to(dtype=like.dtype, device=like.device)
    return t.reshape(-1), t.shape


def restore_queries(
    result: Tensor,
    shape: torch.Size,
    t: Union[Tensor, float],
) -> Union[Tensor, float]:
    """Shape a flat result like the queries ``t``; a number gives a float."""
    if not isinstance(t, Tensor):
        return result.reshape(()).item()
    return result.reshape(shape)
