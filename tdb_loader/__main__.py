from tdb_loader.cli import run

run()
