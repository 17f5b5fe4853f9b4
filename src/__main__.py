from src.cli import app

app()
