import sys
from dotenv import load_dotenv
from config.settings import Settings
from flatbank.services.backup import backup_files

load_dotenv()
settings = Settings.load()

written = backup_files(settings.data_paths, settings.backup_dir)
if not written:
    print("No data files found in " + settings.data_dir)
    sys.exit(1)
for path in written:
    print("Backed up to " + str(path))
