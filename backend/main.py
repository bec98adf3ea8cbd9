"""
Roundtable backend entry point.

Run with:
    uvicorn main:app --reload
or:
    python main.py
"""

from core.app_factory import create_app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
