from app import run_app


def main() -> None:
    run_app()


if __name__ == "__main__":
    main()
