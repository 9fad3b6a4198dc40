"""SVG renderer for patch diagrams."""

from typing import Any, Mapping, Optional, Union

from .primitives import SVGCanvas, Point, STYLE_TITLE
from .layout import (
    LayoutCalculator,
    PatchLayout,
    resolve_options,
)
from .components import (
    ModuleDrawingConfig,
    KnobDrawingConfig,
    ConnectionDrawingConfig,
    draw_module,
    draw_knob,
    draw_connection,
)
from ..models import CanonicalConfig, RenderOptions
from ..parsers import normalize


class PatchRenderer:
    """Renders patch configurations to SVG."""

    def __init__(self, options: Optional[RenderOptions] = None):
        """
        Initialize the renderer.

        Args:
            options: Render options; when omitted, each config's own
                "options" are applied over the defaults
        """
        self.options = options

    def render(self, config: Union[CanonicalConfig, Mapping[str, Any]]) -> str:
        """
        Render a patch configuration.

        Args:
            config: Raw configuration mapping or CanonicalConfig

        Returns:
            SVG document as a string

        Raises:
            ValidationError: If the configuration is structurally invalid
        """
        canonical = normalize(config)
        options = resolve_options(canonical, self.options)
        layout = LayoutCalculator(options).layout(canonical)
        return self.render_layout(layout, options)

    def render_layout(self, layout: PatchLayout, options: RenderOptions) -> str:
        """
        Draw a computed layout.

        Element order: background, title, each module (box, name, ports,
        knobs), then every connection.
        """
        canvas = SVGCanvas(layout.width, layout.height)
        canvas.draw_background(options.background_color)

        if layout.title:
            canvas.draw_text(
                Point(options.padding, options.padding + 20),
                layout.title,
                STYLE_TITLE,
                css_class="title",
            )

        module_config = ModuleDrawingConfig.from_options(options)
        knob_config = KnobDrawingConfig()
        for placement in layout.modules:
            draw_module(canvas, placement, module_config)
            for knob in placement.knobs:
                draw_knob(canvas, knob, knob_config)

        connection_config = ConnectionDrawingConfig()
        for curve in layout.curves:
            draw_connection(canvas, curve, connection_config)

        return canvas.tostring()


def render_patch(
    config: Union[CanonicalConfig, Mapping[str, Any]],
    options: Union[RenderOptions, Mapping[str, Any], None] = None
) -> str:
    """
    Render a complete patch configuration as SVG.

    Args:
        config: Patch configuration (raw mapping or CanonicalConfig)
        options: Render option overrides; these win over the config's
            own "options"

    Returns:
        SVG document as a string
    """
    canonical = normalize(config)
    renderer = PatchRenderer(resolve_options(canonical, options))
    return renderer.render(canonical)


def generate_svg_from_config(
    config: Union[CanonicalConfig, Mapping[str, Any]],
    options: Union[RenderOptions, Mapping[str, Any], None] = None
) -> str:
    """Render a patch configuration loaded from YAML or JSON. Same as render_patch."""
    return render_patch(config, options)
