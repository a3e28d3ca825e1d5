import requests
import json

BASE_URL = "http://127.0.0.1:8000"

# --- sample form ---
payload = {
    "departure_city": "NYC",
    "destination_city": "Paris",
    "start_date": "2025-03-01",
    "end_date": "2025-03-03",
    "travelers": 2,
    "preferences": ["museums", "food"],
    "passport_country": "US",
    "group_type": "couple",
    "comfort_level": 3
}

def run_smoke():
    url = f"{BASE_URL}/api/plan"
    headers = {"Content-Type": "application/json"}

    print(f"➡️ Sending POST {url}")
    print(json.dumps(payload, indent=2))

    resp = requests.post(url, headers=headers, json=payload, timeout=130)

    print(f"\n⬅️ Status: {resp.status_code}")
    try:
        data = resp.json()
        print(json.dumps(data, indent=2, ensure_ascii=False))
    except ValueError:
        print(resp.text)

if __name__ == "__main__":
    run_smoke()
