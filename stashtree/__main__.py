from stashtree.cli import app

app()
