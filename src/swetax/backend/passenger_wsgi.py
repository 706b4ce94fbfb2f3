"""WSGI entrypoint for deploying the SweTax backend behind Passenger."""

from swetax.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
