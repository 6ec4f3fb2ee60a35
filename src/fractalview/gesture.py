# -*- coding: utf-8 -*-
"""
Gesture controller: derives new viewports from raw pointer / touch / wheel
input.

Input is modelled as a `Gesture_event` carrying a contact which is either a
single `Pointer` (mouse or single touch) or a two-finger `Pinch`. All the
transitions are implemented by the pure function `transition`, which takes
the previous `Gesture_state` and `Viewport` and returns the next ones. The
`Gesture_controller` only keeps the current state and forwards complete
viewports to a sink callback.

States::

    Idle --press(Pointer)--> Dragging --release / leave--> Idle
      |                        |
      +--press(Pinch)-----> Pinching <--press(Pinch)--+
                               |
                               +--release(Pointer)--> Dragging (re-anchored)
                               +--release(None)-----> Idle
"""
import enum
import logging
import typing
import dataclasses

import fractalview.settings
import fractalview.utils as fvutils
from fractalview.viewport import Screen_point, pan, zoom_at_point


logger = logging.getLogger(__name__)


class Pointer(typing.NamedTuple):
    """ A single contact: mouse pointer or one touch point """
    point: Screen_point


class Pinch(typing.NamedTuple):
    """ Two touch points """
    p0: Screen_point
    p1: Screen_point

    @property
    def distance(self):
        return self.p0.distance(self.p1)

    @property
    def centroid(self):
        return self.p0.midpoint(self.p1)


class Event_kind(enum.Enum):
    press = "press"
    move = "move"
    release = "release"
    leave = "leave"
    wheel = "wheel"


class Gesture_event(typing.NamedTuple):
    """
    Parameters
    ----------
    kind: `Event_kind`
    contact: `Pointer` | `Pinch` | None
        The contacts still active after the event. For a ``release`` event
        this is the remaining contact (None when everything is released) ;
        for a ``wheel`` event, the cursor position as a `Pointer`.
    delta_y: float
        Wheel scroll delta, only its sign is used
    """
    kind: Event_kind
    contact: typing.Union[Pointer, Pinch, None] = None
    delta_y: float = 0.

    @classmethod
    def press(cls, *points):
        return cls(Event_kind.press, contact_from_points(points))

    @classmethod
    def move(cls, *points):
        return cls(Event_kind.move, contact_from_points(points))

    @classmethod
    def release(cls, *remaining_points):
        return cls(Event_kind.release, contact_from_points(remaining_points))

    @classmethod
    def leave(cls):
        return cls(Event_kind.leave)

    @classmethod
    def wheel(cls, point, delta_y):
        return cls(Event_kind.wheel, Pointer(point), delta_y)


def contact_from_points(points):
    """
    Contact for a sequence of active points: None, a `Pointer` or a `Pinch`
    (extra points beyond the first two are ignored)
    """
    points = tuple(
        p if isinstance(p, Screen_point) else Screen_point(*p)
        for p in points
    )
    if len(points) == 0:
        return None
    if len(points) == 1:
        return Pointer(points[0])
    return Pinch(points[0], points[1])


class Gesture_mode(enum.Enum):
    idle = "Idle"
    dragging = "Dragging"
    pinching = "Pinching"


@dataclasses.dataclass(frozen=True)
class Gesture_state:
    """
    Transient interaction state

    Dragging and pinching are mutually exclusive: ``last_pointer`` is only
    set while dragging, ``last_pinch_distance`` only while pinching.
    """
    is_dragging: bool = False
    last_pointer: typing.Optional[Screen_point] = None
    last_pinch_distance: typing.Optional[float] = None

    @property
    def mode(self):
        if self.is_dragging:
            return Gesture_mode.dragging
        if self.last_pinch_distance is not None:
            return Gesture_mode.pinching
        return Gesture_mode.idle


IDLE = Gesture_state()


def dragging(point):
    return Gesture_state(is_dragging=True, last_pointer=point)


def pinching(distance):
    return Gesture_state(last_pinch_distance=distance)


def wheel_scale(delta_y):
    """ Radius multiplier for one wheel tick - only the sign of delta_y
    matters """
    settings = fractalview.settings
    return 1. + fvutils.sign(delta_y) * settings.wheel_step * settings.zoom_factor


PINCH_AMPLIFICATION_RANGE = (4., 10.)


def check_amplification(amplification):
    low, high = PINCH_AMPLIFICATION_RANGE
    if not low <= amplification <= high:
        raise ValueError(
            f"Pinch amplification expected in [{low}, {high}]: "
            f"{amplification}"
        )


def pinch_scale(distance_ratio, amplification=None):
    """
    Radius multiplier for a pinch step.

    Fingers converging (``distance_ratio < 1``) shrink the radius (zoom in),
    fingers spreading (``distance_ratio > 1``) grow it.
    """
    settings = fractalview.settings
    if amplification is None:
        amplification = settings.pinch_amplification
    check_amplification(amplification)
    zoom_delta = (1. - distance_ratio) * amplification
    return 1. - zoom_delta * settings.zoom_factor


def transition(state, viewport, canvas, event):
    """
    Applies one input event.

    Parameters
    ----------
    state: `Gesture_state`
        The state before the event
    viewport: `Viewport`
        The viewport before the event
    canvas: `Canvas_size`
        The rendering surface size
    event: `Gesture_event`

    Returns
    -------
    (state, viewport)
        The state and viewport after the event. ``viewport`` is the input
        object itself when the event does not change the view.
    """
    kind = event.kind
    contact = event.contact

    if kind is Event_kind.wheel:
        # Independent from the drag / pinch state
        if contact is None or not canvas.is_valid:
            return state, viewport
        scale = wheel_scale(event.delta_y)
        if scale == 1.:
            return state, viewport
        return state, zoom_at_point(viewport, contact.point, canvas, scale)

    if kind is Event_kind.leave:
        return IDLE, viewport

    if kind is Event_kind.press:
        if isinstance(contact, Pinch):
            # Cancels any drag in progress
            return pinching(contact.distance), viewport
        if isinstance(contact, Pointer):
            if state.mode is Gesture_mode.pinching:
                return state, viewport
            return dragging(contact.point), viewport
        return state, viewport

    if kind is Event_kind.release:
        if (
            isinstance(contact, Pointer)
            and state.mode is Gesture_mode.pinching
        ):
            # One finger lifted during a pinch: the remaining one drags
            return dragging(contact.point), viewport
        if isinstance(contact, Pinch):
            # Still 2 points down (e.g. third finger lifted): new baseline
            return pinching(contact.distance), viewport
        return IDLE, viewport

    if kind is Event_kind.move:
        if isinstance(contact, Pinch):
            return _pinch_move(state, viewport, canvas, contact)
        if isinstance(contact, Pointer):
            return _pointer_move(state, viewport, canvas, contact)
        return state, viewport

    raise ValueError(f"Unexpected event kind: {kind}")


def _pointer_move(state, viewport, canvas, contact):
    if state.mode is not Gesture_mode.dragging:
        return state, viewport
    point = contact.point
    new_state = dragging(point)
    if not canvas.is_valid:
        return new_state, viewport
    dx = point.x - state.last_pointer.x
    dy = point.y - state.last_pointer.y
    if dx == 0. and dy == 0.:
        return new_state, viewport
    return new_state, pan(viewport, dx, dy, canvas)


def _pinch_move(state, viewport, canvas, contact):
    distance = contact.distance
    baseline = state.last_pinch_distance
    if baseline is None or baseline <= 0.:
        # No usable baseline: treated as a fresh pinch start
        logger.debug(
            f"Pinch move without baseline ({state.mode.value}), re-baseline"
        )
        return pinching(distance), viewport
    new_state = pinching(distance)
    if not canvas.is_valid or distance == baseline:
        return new_state, viewport
    scale = pinch_scale(distance / baseline)
    if not scale > 0.:
        logger.debug(f"Pinch step skipped, invalid scale {scale}")
        return new_state, viewport
    return new_state, zoom_at_point(viewport, contact.centroid, canvas, scale)


class Gesture_controller:
    def __init__(self, on_viewport, canvas):
        """
        Stateful wrapper around `transition`, one instance per rendering
        surface.

        Parameters
        ----------
        on_viewport: callable
            Viewport-update sink, called with the complete new `Viewport`
            each time an event changes it
        canvas: `Canvas_size`
            The current surface size - update it with `resize`
        """
        check_amplification(fractalview.settings.pinch_amplification)
        self._on_viewport = on_viewport
        self.canvas = canvas
        self.state = IDLE

    @property
    def mode(self):
        return self.state.mode

    def resize(self, canvas):
        self.canvas = canvas

    def reset(self):
        self.state = IDLE

    def handle(self, event, viewport):
        """
        Applies ``event`` to ``viewport`` (the current view, storage is the
        host responsibility). Events shall be passed in arrival order.

        Returns
        -------
        viewport: `Viewport`
            The new viewport (or the input one if unchanged)
        """
        prev_mode = self.state.mode
        self.state, new_viewport = transition(
            self.state, viewport, self.canvas, event
        )
        if self.state.mode is not prev_mode:
            logger.debug(
                f"Gesture {event.kind.value}: "
                f"{prev_mode.value} -> {self.state.mode.value}"
            )
        if new_viewport != viewport:
            self._on_viewport(new_viewport)
        return new_viewport
