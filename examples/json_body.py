"""
Example: JSON request bodies and responses

Structured bodies passed to post()/put() are:
- Serialized to compact JSON
- Sent with Content-Type: application/json unless you set your own
"""

import logging

import minihttp


def main():
    logging.basicConfig(level=logging.DEBUG)

    response = minihttp.post(
        "https://httpbin.org/post",
        body={"name": "minihttp", "features": ["small", "simple"]},
    )
    print(f"Status: {response.code} success={response.success}")
    if response.json is not None:
        print(f"Echoed: {response.json.get('json')}")

    # Strings are sent as-is; Content-Type still defaults to JSON
    response = minihttp.put("https://httpbin.org/put", body='{"action": "update"}')
    print(f"\nPUT Status: {response.code}")

    response = minihttp.get("https://httpbin.org/status/404", timeout=5)
    print(f"\nGET 404 -> client_error={response.client_error} json={response.json}")


if __name__ == "__main__":
    main()
