# client.py
"""
App-instance client for the storefront API.

AuthContext holds the signed-in member for one app instance. It is restored
once from the local store at startup, set on successful sign-in and cleared on
sign-out. StorefrontClient wraps the HTTP API around that context.

Usage:
     store = LocalStore("~/.rmjewellers/state.json")
     client = StorefrontClient("http://localhost:10000", AuthContext(store))
     client.auth.restore()
     if not client.auth.member:
          client.sign_in("RM-1042")
     client.purchase(1.0)
"""
import json
import logging
from typing import Any, Dict, List, Optional

import requests

from utils.local_store import LocalStore

logger = logging.getLogger(__name__)


class ClientError(Exception):
     """The API rejected a request or could not be reached."""


class AuthContext:
     USER_KEY = "user"
     TOKEN_KEY = "token"

     def __init__(self, store: LocalStore):
          self.store = store
          self.member: Optional[Dict[str, Any]] = None
          self.token: Optional[str] = None
          self.loading = True

     def restore(self) -> None:
          """Load the cached member and token, if any. Errors leave the context signed out."""
          try:
               user_data = self.store.get_item(self.USER_KEY)
               if user_data:
                    self.member = json.loads(user_data)
                    self.token = self.store.get_item(self.TOKEN_KEY)
          except (OSError, ValueError):
               logger.exception("Error checking auth state")
               self.member = None
               self.token = None
          finally:
               self.loading = False

     def establish(self, member: Dict[str, Any], token: str) -> None:
          self.store.set_item(self.USER_KEY, json.dumps(member))
          self.store.set_item(self.TOKEN_KEY, token)
          self.member = member
          self.token = token

     def update_member(self, member: Dict[str, Any]) -> None:
          self.store.set_item(self.USER_KEY, json.dumps(member))
          self.member = member

     def clear(self) -> None:
          self.store.remove_item(self.USER_KEY)
          self.store.remove_item(self.TOKEN_KEY)
          self.member = None
          self.token = None

     @property
     def is_admin(self) -> bool:
          return bool(self.member and self.member.get("is_admin"))


class StorefrontClient:

     def __init__(self, base_url: str, auth: AuthContext, http=None, timeout: float = 30):
          self.base_url = base_url.rstrip("/")
          self.auth = auth
          self.http = http or requests.Session()
          self.timeout = timeout

     def _url(self, path: str) -> str:
          return f"{self.base_url}{path}"

     def _headers(self) -> Dict[str, str]:
          if not self.auth.token:
               return {}
          return {"Authorization": f"Bearer {self.auth.token}"}

     def _request(self, method: str, path: str, **kwargs):
          try:
               response = self.http.request(
                    method, self._url(path), headers=self._headers(), timeout=self.timeout, **kwargs
               )
          except requests.RequestException as e:
               raise ClientError(f"{method} {path} failed: {e}") from e
          if response.status_code >= 400:
               try:
                    body = response.json()
               except ValueError:
                    body = None
               if isinstance(body, dict):
                    detail = body.get("detail") or body.get("error")
               else:
                    detail = response.text
               raise ClientError(f"{method} {path} -> {response.status_code}: {detail}")
          return response.json()

     # -----------------------------
     # Session
     # -----------------------------
     def sign_in(self, book_id: str) -> bool:
          """Resolve a Book ID and cache the member locally. False on any failure."""
          self.auth.loading = True
          try:
               data = self._request("POST", "/api/auth/login", json={"book_id": book_id})
               self.auth.establish(data["member"], data["token"])
               return True
          except (ClientError, KeyError, OSError):
               logger.exception("Sign in error")
               return False
          finally:
               self.auth.loading = False

     def sign_out(self) -> None:
          """End the session; local state is cleared even if the server call fails."""
          try:
               if self.auth.token:
                    self._request("POST", "/api/auth/logout")
          except ClientError:
               logger.exception("Sign out error")
          finally:
               self.auth.clear()

     def refresh_member(self) -> Dict[str, Any]:
          member = self._request("GET", "/api/auth/me")
          self.auth.update_member(member)
          return member

     # -----------------------------
     # Prices
     # -----------------------------
     def current_prices(self) -> Optional[Dict[str, Any]]:
          return self._request("GET", "/api/prices/current")

     def update_prices(self, gold_price: float, silver_price: float) -> Dict[str, Any]:
          return self._request(
               "POST", "/api/prices", json={"gold_price": gold_price, "silver_price": silver_price}
          )

     # -----------------------------
     # Purchases
     # -----------------------------
     def purchase(self, grams: float) -> Dict[str, Any]:
          """Buy gold at the current price, then refresh the cached member totals."""
          transaction = self._request("POST", "/api/transactions", json={"grams": grams})
          self.refresh_member()
          return transaction

     def my_transactions(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
          params = {"limit": limit} if limit else None
          return self._request("GET", "/api/transactions/me", params=params)["transactions"]

     def all_transactions(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
          params = {"limit": limit} if limit else None
          return self._request("GET", "/api/transactions", params=params)["transactions"]

     # -----------------------------
     # Members (admin)
     # -----------------------------
     def create_member(self, name: str, book_id: str, phone: str, email: Optional[str] = None) -> Dict[str, Any]:
          return self._request(
               "POST",
               "/api/members",
               json={"name": name, "book_id": book_id, "phone": phone, "email": email},
          )

     def list_members(self) -> List[Dict[str, Any]]:
          return self._request("GET", "/api/members")["members"]
