import os
import sys
import json
import requests

BASE_URL = os.environ.get("SMOKE_URL") or os.environ.get("DEV_URL", "http://127.0.0.1:5002")
API = f"{BASE_URL.rstrip('/')}/api"
HEADERS = {"X-API-Key": os.environ["API_KEY"]} if os.environ.get("API_KEY") else {}


def get(path: str):
    r = requests.get(f"{API}{path}", headers=HEADERS, timeout=10)
    r.raise_for_status()
    return r


def post(path: str, payload: dict):
    r = requests.post(f"{API}{path}", json=payload, headers=HEADERS, timeout=20)
    r.raise_for_status()
    return r


def main():
    print(f"[smoke] Target: {API}")
    print("[smoke] /health:", get("/health").status_code)
    print("[smoke] /sources:", get("/sources").status_code)

    r = post("/citations/parse", {"citation": "Section 1, Data Protection Act 2012 (Act 843)"})
    print("[smoke] /citations/parse:", r.status_code, r.json().get("valid"))

    try:
        r = post("/citations/validate", {"citation": "Data Protection Act 2012, s. 1"})
        print("[smoke] /citations/validate:", r.status_code, json.dumps(r.json(), indent=2)[:300])
        r = post("/search", {"query": "personal data", "limit": 3})
        print("[smoke] /search:", r.status_code, json.dumps(r.json(), indent=2)[:300])
    except requests.HTTPError as he:
        if he.response is not None and he.response.status_code == 503:
            print("[smoke] corpus database missing (503)")
        else:
            raise


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print("[smoke] FAILED:", e)
        sys.exit(1)
