from memo.main import app

app()
