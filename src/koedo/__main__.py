from src.koedo.cli import run

run()
