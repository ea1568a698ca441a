"""WSGI entrypoint for deploying the MadMatch backend behind Passenger."""

from madmatch.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
