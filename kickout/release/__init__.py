"""Release bounded context.

- model: command-line options
- semver: version parsing, comparison and bumping
- manifest: package.json loading and version rewriting
- fsm: linear step runner
- workflow: the release sequence itself
"""

from __future__ import annotations
