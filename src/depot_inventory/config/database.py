from dotenv import load_dotenv
import os
from pathlib import Path

# Load .env from the project root once, when this module is imported
env_path = Path(__file__).resolve().parents[3] / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_CONFIG = {
    "uri": os.getenv("MONGODB_URI"),
    "dbname": os.getenv("MONGODB_DB_NAME", "depot-inventory"),
    "collection": os.getenv("MONGODB_COLLECTION", "products"),
}
