# tools/price_client.py
#
# Mini-CLI per leggere / impostare / azzerare il prezzo di PriceCell
# e stampare uno stato leggibile.
#
# Esempi:
#   python tools/price_client.py get
#   python tools/price_client.py set 355
#   python tools/price_client.py delete
#   python tools/price_client.py --base-url http://127.0.0.1:3000 get

from __future__ import annotations

import argparse
import sys
from typing import Optional

import requests

# Modifica qui (o usa --base-url) se il servizio gira su un host/porta diversi
BASE_URL = "http://127.0.0.1:3000"
TIMEOUT_SEC = 5.0


def _print_header() -> None:
    print("===================================")
    print(" PriceCell - price client ")
    print("===================================\n")


def call_service(
    command: str,
    value: Optional[int] = None,
    base_url: str = BASE_URL,
) -> requests.Response:
    """
    Esegue la chiamata HTTP corrispondente al comando:
    - get    -> GET    /price
    - set    -> PATCH  /price  {"price": value}
    - delete -> DELETE /price
    """
    url = f"{base_url.rstrip('/')}/price"

    if command == "get":
        return requests.get(url, timeout=TIMEOUT_SEC)
    if command == "set":
        return requests.patch(url, json={"price": value}, timeout=TIMEOUT_SEC)
    if command == "delete":
        return requests.delete(url, timeout=TIMEOUT_SEC)

    raise ValueError(f"Unknown command: {command!r}")


def is_success(command: str, resp: requests.Response) -> bool:
    """2xx è sempre ok; per get anche 404 (prezzo non impostato) è una risposta valida."""
    if 200 <= resp.status_code < 300:
        return True
    return command == "get" and resp.status_code == 404


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Client HTTP per PriceCell")
    parser.add_argument("--base-url", default=BASE_URL)

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("get", help="legge il prezzo corrente")
    set_parser = sub.add_parser("set", help="imposta il prezzo")
    set_parser.add_argument("value", type=int)
    sub.add_parser("delete", help="azzera il prezzo")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    value = getattr(args, "value", None)

    _print_header()

    try:
        resp = call_service(args.command, value, base_url=args.base_url)
    except requests.ConnectionError as e:
        print(f"[CONNECTION ERROR] {e}")
        print("Assicurati che il server PriceCell sia avviato, ad esempio:")
        print("  uvicorn app.main:app --app-dir services/pricecell --port 3000")
        return 1
    except requests.Timeout:
        print(f"[TIMEOUT] nessuna risposta entro {TIMEOUT_SEC}s")
        return 1

    print(f"Command          : {args.command}")
    print(f"HTTP status code : {resp.status_code}")

    if args.command == "get":
        if resp.status_code == 200:
            print(f"Price            : {resp.text}")
        elif resp.status_code == 404:
            print("Price            : <non impostato>")
    elif args.command == "set" and resp.status_code == 200:
        print(f"Price            : {value} (impostato)")
    elif args.command == "delete" and resp.status_code == 200:
        print("Price            : <azzerato>")

    ok = is_success(args.command, resp)
    if not ok:
        print(f"[HTTP ERROR] {resp.status_code} {resp.text}")

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
