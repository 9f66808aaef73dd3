# scripts/export_backup.py
import json
import os
import sys

from dotenv import load_dotenv
load_dotenv()

from utils import db

if __name__ == "__main__":
    out_path = sys.argv[1] if len(sys.argv) > 1 else os.getenv("BACKUP_PATH", "cenit-backup.json")
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(db.export_all(), f, indent=2)
    print(f"Backup written to {out_path} (contains admin credentials)")
