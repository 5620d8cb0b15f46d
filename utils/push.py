# utils/push.py
import os
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv

load_dotenv()

EXPO_PUSH_URL = os.getenv("EXPO_PUSH_URL", "https://exp.host/--/api/v2/push/send")
EXPO_ACCESS_TOKEN = os.getenv("EXPO_ACCESS_TOKEN")


class PushError(Exception):
     pass


def configured_tokens() -> List[str]:
     """Device push tokens from EXPO_PUSH_TOKENS (comma-separated)."""
     raw = os.getenv("EXPO_PUSH_TOKENS", "")
     return [t.strip() for t in raw.split(",") if t.strip()]


def send_push(tokens: List[str], title: str, body: str, data: Optional[Dict[str, Any]] = None):
     if not tokens:
          raise PushError("No push tokens to send to")

     headers = {
          "Accept": "application/json",
          "Content-Type": "application/json",
     }
     if EXPO_ACCESS_TOKEN:
          headers["Authorization"] = f"Bearer {EXPO_ACCESS_TOKEN}"

     response = requests.post(
          EXPO_PUSH_URL,
          headers=headers,
          json=[
               {"to": token, "title": title, "body": body, "data": data or {}, "sound": "default"}
               for token in tokens
          ],
          timeout=10,
     )
     if response.status_code not in (200, 201):
          raise PushError(f"Expo push error: {response.status_code} {response.text}")
     return response.json()
