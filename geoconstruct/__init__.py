from .model import (
    AngleBisector,
    Circle,
    Element,
    Line,
    LineLike,
    PerpendicularBisector,
    PerpendicularLine,
    Point,
    is_curve,
    is_line_like,
    new_id,
)
from .derive import distance, midpoint
from .constructions import CircleValue, LineValue, MAX_REFERENCE_DEPTH
from .intersections import (
    circle_circle_intersection,
    find_intersections,
    line_circle_intersection,
    line_line_intersection,
)
from .snap import find_snap_target, nearest_curve, nearest_line_like, snap_radius
from .history import HistoryManager
from .store import ElementStore, TOOLS, Tool
from .pending import (
    PendingAngleRay,
    PendingAngleVertex,
    PendingCircle,
    PendingLine,
    PendingPayload,
    PendingPerpendicularBisector,
    PendingPerpendicularFromLine,
    PendingPerpendicularFromPoint,
    StagedPoint,
)
from .session import ConstructionSession
from .tolerances import ToleranceConfig, get_tolerance_config, set_tolerance_config
from .printer import format_element, print_elements
from .script import Command, ScriptError, parse_script, run_script

__all__ = [
    'AngleBisector',
    'Circle',
    'Element',
    'Line',
    'LineLike',
    'PerpendicularBisector',
    'PerpendicularLine',
    'Point',
    'is_curve',
    'is_line_like',
    'new_id',
    'distance',
    'midpoint',
    'CircleValue',
    'LineValue',
    'MAX_REFERENCE_DEPTH',
    'circle_circle_intersection',
    'find_intersections',
    'line_circle_intersection',
    'line_line_intersection',
    'find_snap_target',
    'nearest_curve',
    'nearest_line_like',
    'snap_radius',
    'HistoryManager',
    'ElementStore',
    'TOOLS',
    'Tool',
    'PendingAngleRay',
    'PendingAngleVertex',
    'PendingCircle',
    'PendingLine',
    'PendingPayload',
    'PendingPerpendicularBisector',
    'PendingPerpendicularFromLine',
    'PendingPerpendicularFromPoint',
    'StagedPoint',
    'ConstructionSession',
    'ToleranceConfig',
    'get_tolerance_config',
    'set_tolerance_config',
    'format_element',
    'print_elements',
    'Command',
    'ScriptError',
    'parse_script',
    'run_script',
]
