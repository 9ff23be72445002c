"""CodeInterpreter tool.

Runs Python snippets in a restricted namespace inside a child interpreter,
so a runaway snippet can be killed when the call times out or is cancelled.
"""

import asyncio
import json
import sys
from typing import Any, Dict

from ..result import ToolResult

MAX_OUTPUT_CHARS = 100 * 1024

# No imports, file access or eval
SAFE_BUILTINS = (
    "abs",
    "all",
    "any",
    "bin",
    "bool",
    "dict",
    "divmod",
    "enumerate",
    "filter",
    "float",
    "hex",
    "int",
    "isinstance",
    "len",
    "list",
    "map",
    "max",
    "min",
    "oct",
    "ord",
    "pow",
    "range",
    "reversed",
    "round",
    "set",
    "sorted",
    "str",
    "sum",
    "tuple",
    "zip",
)

# Runs in the child: reads the snippet from stdin, writes one JSON reply.
# The reply is either {"ok": true, "output": ...} or
# {"ok": false, "kind": "syntax" | "name" | "error", "type": ..., "message": ...}
_RUNNER = """
import builtins, io, json, math, sys
from functools import partial

code = sys.stdin.buffer.read().decode("utf-8")
stdout = io.StringIO()
safe = {name: getattr(builtins, name) for name in json.loads(sys.argv[1])}
safe["print"] = partial(print, file=stdout)
namespace = {"__builtins__": safe, "math": math}
try:
    exec(code, namespace)
except SyntaxError as e:
    reply = {"ok": False, "kind": "syntax", "type": type(e).__name__, "message": str(e)}
except NameError as e:
    reply = {"ok": False, "kind": "name", "type": type(e).__name__, "message": str(e)}
except Exception as e:
    reply = {"ok": False, "kind": "error", "type": type(e).__name__, "message": str(e)}
else:
    output = stdout.getvalue()
    if output:
        output = output.rstrip("\\n")
    elif "result" in namespace:
        output = str(namespace["result"])
    else:
        output = "Code executed successfully (no output)"
    reply = {"ok": True, "output": output}
sys.stdout.write(json.dumps(reply))
"""


async def run_restricted(code: str) -> Dict[str, Any]:
    """Execute code in a child interpreter with safe builtins and ``math`` only.

    The child is killed if this coroutine is cancelled before it exits.

    Args:
        code: Python source

    Returns:
        The child's JSON reply
    """
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-I",
        "-c",
        _RUNNER,
        json.dumps(SAFE_BUILTINS),
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await process.communicate(code.encode("utf-8"))
    finally:
        if process.returncode is None:
            process.kill()
            await process.wait()

    try:
        return json.loads(stdout)
    except ValueError:
        message = stderr.decode("utf-8", errors="replace").strip().splitlines()
        detail = message[-1] if message else f"exit code {process.returncode}"
        return {"ok": False, "kind": "error", "type": "InterpreterError", "message": detail}


class CodeInterpreterTool:
    """Tool for executing Python code in a restricted environment.

    Only safe builtins and the ``math`` module are available.
    """

    @property
    def name(self) -> str:
        return "CodeInterpreter"

    @property
    def description(self) -> str:
        return (
            "Execute a snippet of Python code. Limited to math operations and safe built-ins. "
            "Print values or assign them to 'result'."
        )

    @property
    def parameters(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "Python code to execute (e.g., 'result = 2 + 2')",
                }
            },
            "required": ["code"],
        }

    async def execute(self, **kwargs) -> ToolResult:
        """Execute Python code in restricted environment.

        Args:
            code: Python code to execute

        Returns:
            ToolResult with execution output
        """
        code = kwargs.get("code", "")
        if not code.strip():
            return ToolResult.failure("Code parameter is required")

        reply = await run_restricted(code)
        if reply["ok"]:
            return ToolResult.from_text(reply["output"], MAX_OUTPUT_CHARS)

        message = reply["message"]
        if reply["kind"] == "syntax":
            return ToolResult.failure(f"Syntax error: {message}")
        if reply["kind"] == "name":
            return ToolResult.failure(f"Name error: {message}. Imports and many built-ins are not available.")
        return ToolResult.failure(f"Execution error: {reply['type']}: {message}")
