# scripts/seed_store.py
from dotenv import load_dotenv
load_dotenv()

from utils import db
from utils.config import REDIS_URL, STORE_PREFIX

if __name__ == "__main__":
    print(f"Resetting {STORE_PREFIX}* keys on {REDIS_URL}")
    db.reset()
    print("Done.")
