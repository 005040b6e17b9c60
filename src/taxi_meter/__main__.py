"""Allow ``python -m taxi_meter`` to run the live meter."""

from taxi_meter.main import run

run()
