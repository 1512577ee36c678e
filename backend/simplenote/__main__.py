from simplenote.main import run

run()
