"""Tangent and normal frame computation along a curve.

Both the flattener and the centerline query derive a unit tangent and a unit
normal at an arbitrary curve parameter. The tangent comes from the analytic
derivative with a fallback chain for degenerate spots (cusps, coincident
control points, zero-length segments). The normal is kept sign-continuous
with the previous station so offset outlines never twist.

The previous normal is carried explicitly in a FrameState value that callers
thread through their sampling loop.
"""

from dataclasses import dataclass

from curvedarrow.config import FlattenConfig
from curvedarrow.domain import DEFAULT_NORMAL, DEFAULT_TANGENT, Point, Segment


@dataclass(frozen=True, slots=True)
class FrameState:
    """Running state of a sampling pass.

    Attributes:
        normal: Normal of the most recently emitted station (None at the start)
    """

    normal: Point | None = None


def tangent_with_fallback(
    segment: Segment,
    t: float,
    before: Point | None,
    after: Point | None,
    config: FlattenConfig,
) -> Point | None:
    """Compute the unit tangent of a segment at parameter t.

    Fallback chain when the analytic derivative vanishes:
    1. Finite difference of positions at t +/- step (clamped to [0, 1])
    2. Chord between the neighbouring raw samples (before/after)
    3. None, meaning no usable tangent exists here

    Args:
        segment: Segment to evaluate
        t: Parameter within the segment
        before: Previous raw sample position, if any
        after: Next raw sample position, if any
        config: Flattening configuration with epsilons

    Returns:
        Unit tangent, or None when every fallback is degenerate
    """
    derivative = segment.derivative_at(t)
    if derivative.length() > config.derivative_epsilon:
        return derivative.normalized()

    step = config.finite_difference_step
    t0 = max(0.0, t - step)
    t1 = min(1.0, t + step)
    if t1 > t0:
        difference = segment.point_at(t1) - segment.point_at(t0)
        if difference.length() > config.derivative_epsilon:
            return difference.normalized()

    if before is not None or after is not None:
        here = segment.point_at(t)
        chord = (after if after is not None else here) - (before if before is not None else here)
        if chord.length() > config.chord_epsilon:
            return chord.normalized()

    return None


def chord_tangent(before: Point | None, after: Point | None, epsilon: float) -> Point | None:
    """Unit direction from before to after, None if either is missing or too close."""
    if before is None or after is None:
        return None
    chord = after - before
    if chord.length() <= epsilon:
        return None
    return chord.normalized()


def stable_normal(tangent: Point, reference: Point | None) -> Point:
    """Left normal of a tangent, flipped to agree with a reference normal.

    Args:
        tangent: Unit tangent
        reference: Normal of the neighbouring station, if any

    Returns:
        Unit normal whose dot product with reference is non-negative
    """
    normal = tangent.perpendicular().normalized()
    if normal.is_zero():
        return reference if reference is not None else DEFAULT_NORMAL

    if reference is not None and normal.dot(reference) < 0:
        normal = -normal
    return normal


def resolve_frame(tangent: Point | None, reference: Point | None) -> tuple[Point, Point]:
    """Turn a (possibly missing) tangent into a tangent/normal pair.

    Without a usable tangent the reference normal is reused and the tangent is
    recovered from it; with neither, the fixed default axes are returned.

    Args:
        tangent: Unit tangent or None
        reference: Normal of the neighbouring station, if any

    Returns:
        Tuple of (tangent, normal)
    """
    if tangent is not None:
        return tangent, stable_normal(tangent, reference)

    if reference is not None and reference.length() > 0:
        normal = reference.normalized()
        # Inverse of perpendicular(): (nx, ny) -> (ny, -nx)
        return Point(normal.y, -normal.x), normal

    return DEFAULT_TANGENT, DEFAULT_NORMAL


def advance_frame(state: FrameState, tangent: Point | None) -> tuple[Point, Point, FrameState]:
    """Compute the frame for the next station of a sampling pass.

    Args:
        state: Running state before this station
        tangent: Unit tangent at this station, or None if unusable

    Returns:
        Tuple of (tangent, normal, new_state)
    """
    tangent, normal = resolve_frame(tangent, state.normal)
    return tangent, normal, FrameState(normal=normal)
