import subprocess
import os


def run_fastapi():
    """Run the table browser on $PORT (default 3000)."""
    subprocess.run(
        [
            "uvicorn",
            "app.main:app",
            "--host",
            os.getenv("HOST", "0.0.0.0"),
            "--port",
            str(os.getenv("PORT", 3000)),
            "--proxy-headers",
        ],
        check=True,
    )


if __name__ == "__main__":
    print("[start] launching uvicorn on PORT=", os.getenv("PORT", 3000), flush=True)
    run_fastapi()
