# client/__main__.py
"""
Command-line front end for personal secrets.

    python -m client login --token <bearer token>
    python -m client add --type WEB_LOGIN --name "Work mail" --field username=me --field password=...
    python -m client list --search mail
    python -m client show <id>
    python -m client edit <id> --type SECURE_NOTE --name "Wifi" --field title=Home --field body=...
    python -m client delete <id> --confirm DELETE
    python -m client logout
"""
import argparse
import asyncio
import getpass
import logging
import sys
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from client.api import ApiError, PersonalSecretsClient
from client.cipher import DecryptionError
from client.config import ClientSettings, get_client_settings
from client.forms import SECRET_TYPE_LABELS, SecretForm, SecretType, parse_secret_value
from client.keystore import Credentials, PrivateKeyMissingError, PrivateKeyStore
from client.views import ConfirmationError, PersonalSecretsView, render_table

logger = logging.getLogger("client")


def _parse_fields(pairs: List[str]) -> Dict[str, str]:
    fields = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"Invalid --field '{pair}', expected key=value")
        fields[key.strip()] = value
    return fields


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="client", description="Manage your personal secrets")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="store the session token and private key locally")
    login.add_argument("--token", required=True)
    login.add_argument("--private-key", help="prompted for when omitted")

    sub.add_parser("logout", help="forget the stored token and private key")

    listing = sub.add_parser("list", help="show your secrets")
    listing.add_argument("--search", default="")

    show = sub.add_parser("show", help="show one decrypted secret")
    show.add_argument("secret_id")

    types = [t.value for t in SecretType]
    add = sub.add_parser("add", help="create a secret")
    add.add_argument("--name", required=True)
    add.add_argument("--type", required=True, choices=types)
    add.add_argument("--field", action="append", default=[], metavar="KEY=VALUE")

    edit = sub.add_parser("edit", help="replace a secret's name and value")
    edit.add_argument("secret_id")
    edit.add_argument("--name", required=True)
    edit.add_argument("--type", required=True, choices=types)
    edit.add_argument("--field", action="append", default=[], metavar="KEY=VALUE")

    delete = sub.add_parser("delete", help="delete a secret")
    delete.add_argument("secret_id")
    delete.add_argument("--confirm", default="", help="type DELETE to confirm")
    return parser


def _print_notification(kind: str, text: str) -> None:
    stream = sys.stderr if kind == "error" else sys.stdout
    print(text, file=stream)


async def run(args: argparse.Namespace, settings: ClientSettings) -> int:
    store = PrivateKeyStore(settings.KEYSTORE_PATH)

    if args.command == "login":
        private_key = args.private_key or getpass.getpass("Private key: ")
        store.save(Credentials(access_token=args.token, private_key=private_key))
        print("Credentials stored")
        return 0

    if args.command == "logout":
        store.clear()
        print("Logged out")
        return 0

    credentials = store.load()
    if not credentials.access_token:
        _print_notification("error", "You are not logged in. Run 'login' first.")
        return 1

    async with PersonalSecretsClient(credentials.access_token, settings=settings) as api:
        view = PersonalSecretsView(api, credentials, notify=_print_notification)

        if args.command == "list":
            print(render_table(await view.list_secrets(args.search)))
        elif args.command == "show":
            secret = await view.view_secret(args.secret_id)
            print(f"{secret.secret_name} ({SECRET_TYPE_LABELS.get(secret.secret_type, secret.secret_type)})")
            for key, value in parse_secret_value(secret.secret_type, secret.secret_value).items():
                print(f"  {key}: {value}")
        elif args.command == "add":
            form = SecretForm.build(args.name, SecretType(args.type), _parse_fields(args.field))
            print(await view.add_secret(form))
        elif args.command == "edit":
            form = SecretForm.build(args.name, SecretType(args.type), _parse_fields(args.field))
            current = await view.view_secret(args.secret_id)
            await view.edit_secret(current, form)
        elif args.command == "delete":
            await view.delete_secret(args.secret_id, args.confirm)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s [%(name)s] %(message)s")
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args, get_client_settings()))
    except ValidationError as exc:
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"])
            _print_notification("error", f"{location}: {error['msg']}")
        return 2
    except (ApiError, DecryptionError, PrivateKeyMissingError, ConfirmationError):
        # Already reported through the notifier
        return 1
    except httpx.HTTPError as exc:
        _print_notification("error", f"Cannot reach {get_client_settings().API_URL}: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
