import sys
from pathlib import Path

# ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from todo_api.database import engine, check_connection

try:
    result = check_connection()
except Exception as e:
    print('connection test failed:', e)
    sys.exit(1)
print('connected to', engine.url.render_as_string(hide_password=True))
print('result:', result)
