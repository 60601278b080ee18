from tracechart.config import ChartConfig, multi_series_config, single_series_config, validate_config
from tracechart.errors import ChartDataError, ChartError, ChartHostError, ChartShapeError
from tracechart.geometry import Geometry, LegendEntry, LinePath, Marker, build_geometry
from tracechart.host import ChartHost
from tracechart.interaction import HoverController, PointerEvent, TooltipState, parse_pointer_event
from tracechart.normalize import NormalizedSeries, SeriesPoints, normalize
from tracechart.palette import SeriesStyle, assign_styles, color_for
from tracechart.records import ChartRecord, MultiShape, SingleShape, load_records, parse_records
from tracechart.render import DrawCommands, render
from tracechart.scales import LinearScale, ScalePair, build_scales, nice_domain
from tracechart.view import ChartView, mount_views

__all__ = [
    "ChartConfig",
    "ChartDataError",
    "ChartError",
    "ChartHost",
    "ChartHostError",
    "ChartRecord",
    "ChartShapeError",
    "ChartView",
    "DrawCommands",
    "Geometry",
    "HoverController",
    "LegendEntry",
    "LinePath",
    "LinearScale",
    "Marker",
    "MultiShape",
    "NormalizedSeries",
    "PointerEvent",
    "ScalePair",
    "SeriesPoints",
    "SeriesStyle",
    "SingleShape",
    "TooltipState",
    "assign_styles",
    "build_geometry",
    "build_scales",
    "color_for",
    "load_records",
    "mount_views",
    "multi_series_config",
    "nice_domain",
    "normalize",
    "parse_pointer_event",
    "parse_records",
    "render",
    "single_series_config",
    "validate_config",
]
