"""Create a .venv on Windows, install TypeLadder with its test extra, and open a Command Prompt in it."""

from __future__ import annotations

from pathlib import Path
import subprocess
import sys


def run_command(command: list[str]) -> None:
	"""Run a subprocess command and bubble up errors."""
	subprocess.run(command, check=True)


def open_activated_prompt(venv_path: Path) -> None:
	activate_bat = venv_path / "Scripts" / "activate.bat"
	if not activate_bat.exists():
		raise FileNotFoundError(f"Activation script not found at {activate_bat}")

	print("Opening a Command Prompt inside .venv; run 'python app_main.py' to start TypeLadder.")
	print("Close the shell or type 'exit' when you are done.")
	subprocess.run(["cmd.exe", "/k", str(activate_bat)], check=True)


def main() -> None:
	project_root = Path(__file__).resolve().parent
	venv_path = project_root / ".venv"

	print(f"Creating {venv_path} with {sys.executable}")
	run_command([sys.executable, "-m", "venv", str(venv_path)])

	venv_python = venv_path / "Scripts" / "python.exe"
	run_command([str(venv_python), "-m", "pip", "install", "--upgrade", "pip"])
	run_command([str(venv_python), "-m", "pip", "install", "-e", f"{project_root}[test]"])

	open_activated_prompt(venv_path)


if __name__ == "__main__":
	main()
