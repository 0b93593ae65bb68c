# check_daraja.py in the project root
# Run it with: python check_daraja.py

import os
import sys

import django

# Setup Django
sys.path.append(os.path.dirname(os.path.abspath(__file__)))
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'project.settings')


REQUIRED_SETTINGS = {
    'consumer_key': 'Consumer Key',
    'consumer_secret': 'Consumer Secret',
    'shortcode': 'Shortcode',
    'passkey': 'Passkey',
    'callback_url': 'Callback URL',
    'base_url': 'Gateway URL',
}
SECRET_SETTINGS = ('consumer_key', 'consumer_secret', 'passkey')


def check_settings():
    from django.core.exceptions import ImproperlyConfigured
    from daraja.conf import get_daraja_config

    print("\n1. CHECKING SETTINGS:")
    print("-" * 70)
    try:
        config = get_daraja_config()
    except ImproperlyConfigured as e:
        print(f"✗ {e}")
        return None

    print(f"✓ {'Environment':20} = {config.environment}")
    for attr, name in REQUIRED_SETTINGS.items():
        value = getattr(config, attr)
        if attr in SECRET_SETTINGS and len(value) > 15:
            value = f"{value[:15]}..."
        print(f"✓ {name:20} = {value}")
    return config


def check_access_token(config):
    from daraja.mpesa.service import STKPushService
    from daraja.mpesa.utils import basic_auth_header

    print("\n2. TESTING ACCESS TOKEN:")
    print("-" * 70)

    service = STKPushService(config.base_url, timeout=config.timeout)
    try:
        token = service.access_token(
            basic_auth_header(config.consumer_key, config.consumer_secret)
        )
    except Exception as e:
        print(f"✗ Error: {e}")
        print("\n❌ Your Consumer Key or Secret is incorrect, or the gateway is unreachable!")
        print("\nTo fix:")
        print("1. Go to https://developer.safaricom.co.ke/")
        print("2. Login > My Apps > Select your app")
        print("3. Copy the Consumer Key and Consumer Secret")
        print("4. Set MPESA_CONSUMER_KEY and MPESA_CONSUMER_SECRET")
        return False
    finally:
        service.close()

    print(f"✓ Access Token: {token.access_token[:30]}... (expires in {token.expires_in}s)")
    print("\n✅ SUCCESS! Your M-Pesa credentials are working!")
    return True


def main():
    django.setup()

    print("=" * 70)
    print("DARAJA CONFIGURATION CHECK")
    print("=" * 70)

    config = check_settings()
    if config is None:
        print("\n❌ Some settings are missing! Set them in the environment or settings.py")
        return 1

    ok = check_access_token(config)
    print("\n" + "=" * 70)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
