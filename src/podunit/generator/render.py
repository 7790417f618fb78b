"""Rendering of UnitSpec into unit-file text."""

from datetime import datetime
from typing import List

from podunit import __version__
from podunit.models.unit import UnitSpec
from podunit.utils.templates import render_template


USER_DEPENDENCIES_COMMENT = "# User-defined dependencies"

UNIT_TEMPLATE = """\
# {{ unit.file_name }}
{% for line in unit.header %}
# {{ line }}
{% endfor %}

[Unit]
Description=Podman {{ unit.file_name }}
Documentation=man:podman-generate-systemd(1)
{% for key, value in unit.dependencies %}
{{ key }}={{ value }}
{% endfor %}
RequiresMountsFor={{ unit.requires_mounts_for }}
{% if unit.user_dependencies %}

{{ user_dependencies_comment }}
{% for key, value in unit.user_dependencies %}
{{ key }}={{ value }}
{% endfor %}
{% endif %}

[Service]
{% for value in unit.environment %}
Environment={{ value }}
{% endfor %}
Restart={{ unit.restart_policy }}
{% if unit.restart_sec is not none %}
RestartSec={{ unit.restart_sec }}
{% endif %}
{% if unit.timeout_start_sec is not none %}
TimeoutStartSec={{ unit.timeout_start_sec }}
{% endif %}
TimeoutStopSec={{ unit.timeout_stop_sec }}
{% for command in unit.exec_start_pre %}
ExecStartPre={{ command }}
{% endfor %}
ExecStart={{ unit.exec_start }}
ExecStop={{ unit.exec_stop }}
ExecStopPost={{ unit.exec_stop_post }}
{% if unit.pid_file %}
PIDFile={{ unit.pid_file }}
{% endif %}
Type={{ unit.service_type }}
{% if unit.notify_access %}
NotifyAccess={{ unit.notify_access }}
{% endif %}

[Install]
WantedBy={{ unit.wanted_by | join(" ") }}
"""


def header_lines(no_header: bool = False) -> List[str]:
    """Comment lines identifying the generator, unless suppressed."""
    if no_header:
        return []
    return [
        f"autogenerated by podunit {__version__}",
        datetime.now().astimezone().strftime("%a %b %d %H:%M:%S %Z %Y"),
    ]


def render_unit(unit: UnitSpec) -> str:
    """Render a unit to text."""
    return render_template(
        UNIT_TEMPLATE,
        unit=unit,
        user_dependencies_comment=USER_DEPENDENCIES_COMMENT,
    )
