"""
AWS Lambda entry point — serves the RTA FastAPI app through Mangum.
"""

from mangum import Mangum

from rta.main import app

handler = Mangum(app, lifespan="off")
