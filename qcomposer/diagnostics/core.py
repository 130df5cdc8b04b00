"""Diagnostic checks for state vectors."""

from __future__ import annotations

import torch


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    Compute the L2 norm of a state vector.

    The last dimension is taken to hold the amplitudes.

    Parameters
    ----------
    state:
        Complex tensor with shape (..., dim).

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...) giving the norm for each batch element.
    """
    if state.dim() < 1:
        raise ValueError("state_norm expects a tensor with at least 1 dimension.")

    norm_sq = (state.conj() * state).sum(dim=-1).real
    return torch.sqrt(norm_sq)


def is_normalized(state: torch.Tensor, atol: float = 1e-9) -> bool:
    """Return True if every state in ``state`` has norm 1 within ``atol``."""
    norms = state_norm(state)
    if not torch.all(torch.isfinite(norms)):
        return False
    return bool(torch.allclose(norms, torch.ones_like(norms), atol=atol, rtol=0.0))


def assert_normalized(
    state: torch.Tensor,
    atol: float = 1e-9,
) -> None:
    """
    Assert that a state vector has norm ~1 within a tolerance.

    Raises
    ------
    ValueError
        If the state is not normalized within the tolerance.
    """
    if not is_normalized(state, atol=atol):
        raise ValueError(
            f"State is not normalized within tolerance {atol}. "
            f"Norms found: {state_norm(state).detach().cpu().tolist()}"
        )


def fidelity(state_a: torch.Tensor, state_b: torch.Tensor) -> torch.Tensor:
    """
    Fidelity ``|<a|b>|**2`` between two pure state vectors.

    Insensitive to global phase, so it is the right way to compare states
    produced by equivalent circuits.
    """
    if state_a.shape != state_b.shape:
        raise ValueError("fidelity expects tensors with the same shape.")
    inner = (state_a.conj() * state_b).sum(dim=-1)
    return inner.abs() ** 2
