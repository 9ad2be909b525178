from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from takhrij_client.config import DEFAULT_BASE_URL, ClientSettings


class ClientSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = ClientSettings.from_env()
        self.assertEqual(settings.base_url, DEFAULT_BASE_URL)
        self.assertEqual(settings.timeout, 60.0)
        self.assertEqual(settings.max_attempts, 1)
        self.assertEqual(settings.search_url, "https://takhrij-backend.onrender.com/search-hadith")
        self.assertEqual(settings.commentary_url, "https://takhrij-backend.onrender.com/gpt-commentary")

    def test_environment_overrides_defaults(self) -> None:
        env = {
            "TAKHRIJ_BASE_URL": "http://localhost:5000/",
            "TAKHRIJ_TIMEOUT": "2.5",
            "TAKHRIJ_MAX_ATTEMPTS": "3",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = ClientSettings.from_env()
        self.assertEqual(settings.base_url, "http://localhost:5000")
        self.assertEqual(settings.timeout, 2.5)
        self.assertEqual(settings.max_attempts, 3)

    def test_arguments_override_environment(self) -> None:
        with patch.dict(os.environ, {"TAKHRIJ_BASE_URL": "http://env", "TAKHRIJ_TIMEOUT": "9"}, clear=True):
            settings = ClientSettings.from_env(base_url="http://arg", timeout=1)
        self.assertEqual(settings.base_url, "http://arg")
        self.assertEqual(settings.timeout, 1.0)

    def test_invalid_values_raise(self) -> None:
        for env in ({"TAKHRIJ_TIMEOUT": "soon"}, {"TAKHRIJ_TIMEOUT": "0"}, {"TAKHRIJ_MAX_ATTEMPTS": "x"}):
            with self.subTest(env=env), patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ValueError):
                    ClientSettings.from_env()
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValueError):
                ClientSettings.from_env(max_attempts=0)

    def test_explicit_timeout_must_be_positive(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            for timeout in (0, -1.5):
                with self.subTest(timeout=timeout), self.assertRaises(ValueError):
                    ClientSettings.from_env(timeout=timeout)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
