from app.lunchly import create_app

app = create_app()
