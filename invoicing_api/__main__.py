"""Run the API with uvicorn: ``python -m invoicing_api``."""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "invoicing_api.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
