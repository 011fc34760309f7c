import sys
from pathlib import Path

# Add services to path
if Path("/app").exists():
    sys.path.insert(0, "/app/services")
else:
    services_path = Path(__file__).resolve().parents[2] / "services"
    if str(services_path) not in sys.path:
        sys.path.insert(0, str(services_path))
