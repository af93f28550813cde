"""
deskscripts - small desktop glue utilities.

Commands:
    - cat-pdf: concatenate PDFs with pdftk, naming plain files automatically
    - change-sink: switch the default PipeWire sink and move streams onto it
    - send-invoice: load the mail configuration and build the SMTP transport

Each command is a thin wrapper around the functions exported here, which
shell out through :class:`CommandRunner`.
"""

__version__ = "1.0.0"

# Error types
from deskscripts.exceptions import (
    ScriptsError,
    CommandError,
    ToolNotFoundError,
    DeviceDumpError,
    ConfigError,
    MailError,
    PdfValidationError,
    HandleAssignmentError,
    HandleInvariantError,
)

# External commands
from deskscripts.process import CommandResult, CommandRunner, run_success

# PDF concatenation
from deskscripts.handles import HandlePlan, assign_handles
from deskscripts.pdf import concatenate

# Sink switching
from deskscripts.sink import Target, switch_sink

# Configuration and mail
from deskscripts.config import Config, default_config_path, load_config
from deskscripts.mail import SmtpTransport, new_transport

__author__ = "deskscripts contributors"
__license__ = "MIT"

__all__ = [
    "ScriptsError",
    "CommandError",
    "ToolNotFoundError",
    "DeviceDumpError",
    "ConfigError",
    "MailError",
    "PdfValidationError",
    "HandleAssignmentError",
    "HandleInvariantError",
    "CommandResult",
    "CommandRunner",
    "run_success",
    "HandlePlan",
    "assign_handles",
    "concatenate",
    "Target",
    "switch_sink",
    "Config",
    "default_config_path",
    "load_config",
    "SmtpTransport",
    "new_transport",
    "__version__",
]
