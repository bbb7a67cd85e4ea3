# ledger/__main__.py

from .app import create_app


def main():
    app = create_app()
    app.run(host=app.config["HOST"], port=app.config["PORT"])


# ---------------- Run ----------------
if __name__ == "__main__":
    main()
