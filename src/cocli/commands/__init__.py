"""Sub-command groups for the cocli CLI.

Each module defines a Typer sub-application that
:mod:`cocli.app` registers on the root app:

- :mod:`~cocli.commands.show` -- ``cocli show ...`` read-only views.
- :mod:`~cocli.commands.create` -- ``cocli create deployment``.
- :mod:`~cocli.commands.shared` -- client construction and output-mode
  dispatch used by both.
"""
