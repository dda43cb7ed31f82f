import html
import io
import logging
import xml.etree.ElementTree as ET

import matplotlib.pyplot as plt

from .chart import DEFAULT_CONFIG, ChartConfig, draw_hover_overlay, render_figure
from .state import HoverState

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", "http://www.w3.org/1999/xlink")


def _tag_hover_elements(root):
    points = 0
    overlays = 0
    for element in root.iter():
        kind, _, rest = element.get("id", "").partition("-")
        if kind == "point" and rest.isdigit():
            element.set("class", "point-target")
            element.set("data-point", rest)
            points += 1
        elif kind == "hover":
            element.set("class", "hover-overlay")
            element.set("data-point", rest.split("-", 1)[0])
            element.set("visibility", "hidden")
            element.set("pointer-events", "none")
            overlays += 1
    return points, overlays


def build_interactive_svg(records, config: ChartConfig = DEFAULT_CONFIG) -> str:
    """Render the chart with a hidden hover overlay for every record.

    Overlays and points carry ``data-point`` attributes so the page script can
    toggle them without re-rendering through matplotlib.
    """
    fig, ax = render_figure(records, HoverState(), config)
    for i, record in enumerate(records):
        draw_hover_overlay(ax, i, record, config)

    buf = io.BytesIO()
    fig.savefig(buf, format="svg")
    plt.close(fig)

    root = ET.fromstring(buf.getvalue())
    points, overlays = _tag_hover_elements(root)
    logger.debug("Tagged %d points and %d overlay elements", points, overlays)

    root.set("width", "100%")
    root.attrib.pop("height", None)
    return ET.tostring(root, encoding="unicode")


def build_app_js():
    return """(function () {
  const chart = document.getElementById('chart');
  const status = document.getElementById('status');
  const points = Array.from(chart.querySelectorAll('.point-target'));
  const overlays = Array.from(chart.querySelectorAll('.hover-overlay'));

  let state = { hovered: null };

  function setStatus(msg) {
    status.textContent = msg || '';
  }

  function update(current, event) {
    if (event.type === 'hover') return { hovered: event.point };
    if (event.type === 'unhover') return { hovered: null };
    return current;
  }

  function render(current) {
    for (const p of points) {
      p.style.opacity = p.getAttribute('data-point') === current.hovered ? '0' : '';
    }
    for (const o of overlays) {
      o.setAttribute('visibility', o.getAttribute('data-point') === current.hovered ? 'visible' : 'hidden');
    }
  }

  function dispatch(event) {
    state = update(state, event);
    render(state);
  }

  if (!points.length) {
    setStatus('No measurements to show.');
    return;
  }

  for (const p of points) {
    const point = p.getAttribute('data-point');
    p.addEventListener('mouseenter', function () {
      dispatch({ type: 'hover', point });
    });
    p.addEventListener('mouseleave', function () {
      dispatch({ type: 'unhover' });
    });
  }

  render(state);
  setStatus('');
})();
"""


def build_html(title, svg, subtitle=""):
    title = html.escape(title)
    subtitle = html.escape(subtitle)
    return f"""<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
  <title>{title}</title>
  <style>
    :root {{
      --bg: #f5f7fb;
      --panel: #ffffff;
      --text: #0f172a;
      --muted: #64748b;
      --line: #dbe3ef;
    }}
    * {{ box-sizing: border-box; }}
    body {{
      margin: 0;
      font-family: ui-sans-serif, -apple-system, Segoe UI, Helvetica, Arial, sans-serif;
      color: var(--text);
      background: linear-gradient(180deg, #eef2ff 0%, var(--bg) 35%, var(--bg) 100%);
    }}
    .wrap {{ max-width: 1400px; margin: 20px auto; padding: 0 16px 24px; }}
    .panel {{
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 12px;
      padding: 14px;
      box-shadow: 0 6px 18px rgba(15, 23, 42, 0.05);
    }}
    h1 {{ margin: 0 0 10px; font-size: 22px; }}
    .sub {{ margin: 0 0 12px; color: var(--muted); font-size: 13px; }}
    .status {{ margin: 4px 0 0; min-height: 18px; font-size: 12px; color: #b45309; }}
    .plot {{ width: 100%; margin-top: 10px; border: 1px solid var(--line); border-radius: 10px; padding: 6px; background: #fff; }}
    .plot svg {{ display: block; height: auto; }}
    .point-target {{ cursor: pointer; }}
  </style>
</head>
<body>
  <div class=\"wrap\">
    <div class=\"panel\">
      <h1>{title}</h1>
      <p class=\"sub\">{subtitle}</p>
      <div class=\"status\" id=\"status\"></div>
      <div id=\"chart\" class=\"plot\">
{svg}
      </div>
    </div>
  </div>
  <script>
{build_app_js()}
  </script>
</body>
</html>
"""
