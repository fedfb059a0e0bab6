from ecotrack.main import run

run()
