"""SVG templates, registered by name with a Jinja2 DictLoader."""

FUEL_GAUGE_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 110" role="img" aria-label="{{ gauge.aria_label }}"{% if gauge.read_only %} opacity="0.8"{% endif %}>
  <g class="track">
  {%- for segment in segments %}
    <path d="{{ segment.path }}" fill="{{ track_color }}" stroke="#ffffff" stroke-width="1"/>
  {%- endfor %}
  </g>
  <g class="fill">
  {%- for segment in segments if segment.filled %}
    <path d="{{ segment.path }}" fill="{{ segment.fill }}" stroke="#ffffff" stroke-width="1" data-index="{{ segment.index }}"/>
  {%- endfor %}
  </g>
  {%- if not gauge.read_only %}
  <g class="hit-targets">
  {%- for segment in segments %}
    <path d="{{ segment.hit_path }}" fill="transparent" role="button" aria-label="Combustible al {{ segment.value }}%" data-value="{{ segment.value }}"/>
  {%- endfor %}
  </g>
  {%- endif %}
  <g class="needle" transform="{{ gauge.needle_transform }}">
    <line x1="{{ cx }}" y1="{{ cy }}" x2="{{ needle_tip }}" y2="{{ cy }}" stroke="#111827" stroke-width="2" stroke-linecap="round"/>
    <circle cx="{{ cx }}" cy="{{ cy }}" r="5" fill="#111827"/>
    <circle cx="{{ cx }}" cy="{{ cy }}" r="3" fill="#ffffff"/>
  </g>
  <text x="8" y="106" font-size="13" font-weight="700" fill="#6B7280" text-anchor="middle">E</text>
  <text x="192" y="106" font-size="13" font-weight="700" fill="#6B7280" text-anchor="middle">F</text>
</svg>
"""

VEHICLE_DIAGRAM_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg" width="{{ width }}" height="{{ height }}" viewBox="0 0 {{ width }} {{ height }}" role="img" aria-label="Diagrama: {{ view_label }}">
  <image href="{{ diagram.image_src }}" x="0" y="0" width="{{ width }}" height="{{ height }}"><title>{{ diagram.image_alt }}</title></image>
  {%- for pin in pins %}
  <g class="marker-pin" data-marker-id="{{ pin.marker.id }}">
    <title>{{ pin.aria_label }}</title>
    <circle cx="{{ pin.cx }}" cy="{{ pin.cy }}" r="{{ pin_radius }}" fill="{{ pin.color }}" stroke="#ffffff" stroke-width="2"/>
    <text x="{{ pin.cx }}" y="{{ pin.cy }}" font-size="10" font-weight="700" fill="#ffffff" text-anchor="middle" dominant-baseline="central">{{ pin.number }}</text>
  </g>
  {%- endfor %}
  {%- if diagram.hint %}
  <text class="hint" x="{{ width / 2 }}" y="{{ height - 12 }}" font-size="12" fill="#6B7280" text-anchor="middle">{{ diagram.hint }}</text>
  {%- endif %}
</svg>
"""

TEMPLATES = {
    "fuel_gauge.svg": FUEL_GAUGE_SVG,
    "vehicle_diagram.svg": VEHICLE_DIAGRAM_SVG,
}
