from gamedb.main import run

run()
