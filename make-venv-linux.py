"""Create a .venv on Linux, install TypeLadder with its test extra, and open a shell in it."""

from __future__ import annotations

from pathlib import Path
import subprocess
import sys


def run_command(command: list[str]) -> None:
	subprocess.run(command, check=True)


def open_activated_shell(venv_path: Path) -> None:
	activate_script = venv_path / "bin" / "activate"
	if not activate_script.exists():
		raise FileNotFoundError(f"Activation script not found at {activate_script}")

	print("Opening a shell inside .venv; run 'python app_main.py' to start TypeLadder or 'pytest' for the tests.")
	print("Type 'exit' to leave the environment.")
	subprocess.run(["/bin/bash", "-c", f"source '{activate_script}' && exec $SHELL"], check=True)


def main() -> None:
	project_root = Path(__file__).resolve().parent
	venv_path = project_root / ".venv"

	print(f"Creating {venv_path} with {sys.executable}")
	run_command([sys.executable, "-m", "venv", str(venv_path)])

	venv_python = venv_path / "bin" / "python"
	run_command([str(venv_python), "-m", "pip", "install", "--upgrade", "pip"])
	run_command([str(venv_python), "-m", "pip", "install", "-e", f"{project_root}[test]"])

	open_activated_shell(venv_path)


if __name__ == "__main__":
	main()
