"""shipnext package.

Simple API for scripts:

    import shipnext

    # Convert a Next.js project into a Tauri v2 iOS app
    result = shipnext.bootstrap("/path/to/next-app", app_name="demoapp")
"""

from pathlib import Path
from typing import Any, Optional

__version__ = "0.1.0"

from .config import ProjectContext, load_project_context  # noqa: E402
from .orchestrator import Orchestrator, RunReport  # noqa: E402
from .plans import bootstrap_plan  # noqa: E402
from .util.log import Logger  # noqa: E402


def bootstrap(
    project_dir: str | Path,
    *,
    config_file: Optional[str | Path] = None,
    log: Optional[Logger] = None,
    **overrides: Any,
) -> dict:
    """Run the bootstrap plan. Returns structured result.

    Args:
        project_dir: Path to the Next.js project
        config_file: Optional path to shipnext.yaml
        log: Optional logger (defaults to console output)
        **overrides: ProjectContext fields (app_name, identifier, team_id, ...)

    Returns:
        dict with keys: plan, status, steps, failed_step, error
    """
    ctx = load_project_context(
        Path(project_dir),
        Path(config_file) if config_file else None,
        overrides,
    )
    report = Orchestrator.for_context(ctx, log).run(bootstrap_plan(ctx))
    return report.as_dict()


__all__ = [
    "bootstrap",
    "ProjectContext",
    "Orchestrator",
    "RunReport",
    "load_project_context",
    "__version__",
]
