"""Plain-text deployment status report."""

from collections.abc import Sequence
from datetime import datetime, timedelta
import re

from forge_status.models import DeploymentStatus, InstanceHealth, ProjectInfo, ServiceCheck
from forge_status.resolver import should_fetch_health

# Keeps backend diagnostics on a single line
_UNSAFE_RESULT_CHARS = re.compile(r"[^a-zA-Z0-9. ]+")

HEADER_TITLE = "Deployment Status"
NOT_DEPLOYED = "** Project has not been deployed **"
NO_INSTANCES = "** No deployed instances found **"


def sanitize_result(text: str) -> str:
    """Drop everything but ASCII letters, digits, dots and spaces."""
    return _UNSAFE_RESULT_CHARS.sub("", text)


def format_check(check: ServiceCheck) -> str:
    """Render a service check as ``OK`` or ``FAIL [code] <reason>``."""
    if check.ok:
        return "OK"
    reason = sanitize_result(check.result_str)
    if check.result_code == 0:
        return f"FAIL {reason}"
    return f"FAIL {check.result_code} {reason}"


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as RFC822, e.g. ``02 Jan 06 15:04 UTC``."""
    offset = value.utcoffset()
    zone = "UTC" if offset is None or offset == timedelta(0) else value.strftime("%z")
    return f"{value.strftime('%d %b %y %H:%M')} {zone}"


def _label(name: str) -> str:
    return f"{name + ':':<14}"


def _header_lines(project: ProjectInfo) -> list[str]:
    return [
        HEADER_TITLE,
        "-" * 17,
        f"{_label('Project')}{project.name}",
        f"{_label('Project Slug')}{project.slug}",
        f"{_label('Repository')}{project.repo_url}",
    ]


def _build_line(status: DeploymentStatus) -> str:
    started = format_timestamp(status.execution_time)
    if should_fetch_health(status):
        return f"{_label('Build')}#{status.build_number} on {started} by {status.executor_id}"
    return (
        f"{_label('Build')}#{status.build_number} started {started} "
        f"by {status.executor_id} - {status.build_state}"
    )


def _instance_lines(instances: Sequence[InstanceHealth]) -> list[str]:
    lines = []
    current_region = ""
    for instance in instances:
        # Positional: unsorted input repeats region headers
        if instance.region != current_region:
            current_region = instance.region
            lines.append(f"• {current_region}")
        lines.append(
            f"  {instance.instance})\tCardinal: {instance.cardinal.host} - "
            f"{format_check(instance.cardinal)}"
        )
        lines.append(f"\tNakama:   {instance.nakama.host} - {format_check(instance.nakama)}")
    return lines


def render_report(
    project: ProjectInfo,
    status: DeploymentStatus | None,
    instances: Sequence[InstanceHealth] | None = None,
) -> str:
    """Render the deployment status report.

    Args:
        project: Identity of the queried project, used for the header only.
        status: Decoded deployment status, or None if never deployed.
        instances: Decoded health instances. Ignored unless the build is
            finished; None stops the report after the build line.

    Returns:
        Report text terminated by a newline.
    """
    lines = _header_lines(project)

    if status is None:
        lines += ["", NOT_DEPLOYED]
        return "\n".join(lines) + "\n"

    lines.append(_build_line(status))
    if not should_fetch_health(status) or instances is None:
        return "\n".join(lines) + "\n"

    if not instances:
        lines.append(f"{_label('Health')}{NO_INSTANCES}")
    else:
        lines.append(f"{_label('Health')}({len(instances)} deployed instances)")
        lines += _instance_lines(instances)
    return "\n".join(lines) + "\n"
