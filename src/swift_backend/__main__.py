from swift_backend.main import run

run()
