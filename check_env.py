#!/usr/bin/env python3
"""Helper script to check and create the .env file for geocoding and the orders database."""

from pathlib import Path
import sys

ENV_TEMPLATE = """# Google Maps (required for /api/geocode and shipping zones)
EMP_GOOGLE_MAPS_API_KEY=your-server-side-key
# Optional region bias for Google results
EMP_GEOCODE_REGION=ar

# Route resolvers through another deployment's /api/geocode instead of Google
# EMP_GEOCODE_PROXY_URL=https://empalombia.example.com

# Orders database (required for /api/orders/map)
EMP_SUPABASE_URL=https://your-project-id.supabase.co
EMP_SUPABASE_KEY=your-service-role-key-here

# Shipping tiers
# EMP_SHIPPING_COST_CENTRO=5000
# EMP_SHIPPING_COST_BORDES=9000
# EMP_BORDES_NEIGHBORHOODS=["belgrano","nuñez","urquiza"]
"""


def _mask(value: str, keep: int = 6) -> str:
    if len(value) <= keep * 2:
        return value
    return value[:keep] + "..." + value[-keep:]


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Empalombia environment checker")
    print("=" * 60)

    if not env_file.exists():
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"❌ .env file NOT found, created a template at: {env_file}")
        print("⚠️  Edit it and fill in your keys, then run this script again.")
        return 1

    print(f"✅ Found .env file at: {env_file}")
    sys.path.insert(0, str(project_root / "src"))
    try:
        from empalombia.config import Settings
        settings = Settings()
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        return 1

    ok = True
    if settings.google_maps_api_key:
        print(f"✅ Google Maps key: {_mask(settings.google_maps_api_key)}")
    elif settings.geocode_proxy_url:
        print(f"✅ Geocoding through proxy: {settings.geocode_proxy_url}")
    else:
        print("❌ Neither EMP_GOOGLE_MAPS_API_KEY nor EMP_GEOCODE_PROXY_URL is set")
        ok = False

    if settings.supabase_url and settings.supabase_key:
        print(f"✅ Orders database: {settings.supabase_url}")
    else:
        print("❌ EMP_SUPABASE_URL / EMP_SUPABASE_KEY missing, /api/orders/map will answer 503")
        ok = False

    print(f"ℹ️  Shipping costs: centro={settings.shipping_cost_centro} bordes={settings.shipping_cost_bordes}")
    print(f"ℹ️  Bordes neighborhoods: {', '.join(settings.bordes_neighborhoods)}")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
