# create_tables.py
# Creates every table of the team formation schema on DATABASE_URL.
from dotenv import load_dotenv

load_dotenv()

from infrastructure.database import engine  # noqa: E402
from infrastructure.persistence.tables import Base  # noqa: E402


def main() -> None:
    Base.metadata.create_all(bind=engine)
    print(f"Tables created on {engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
