from changed_files.cli import app

app()
