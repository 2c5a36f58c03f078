from records.cli.commands import app

app()
