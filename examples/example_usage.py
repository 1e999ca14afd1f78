"""Contoh: memakai service layer tanpa Flask.

Controller hanya lapisan tipis; aturan registrasi dan login ada di service.
"""

import importlib

from config import get_settings_module

from src.jurnal_guru.jurnal_guru.accounts.service import RegistrationInput
from src.jurnal_guru.jurnal_guru.container import build_container_from_settings


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)

    code = container.auth_code_service.issue(None, "admin").code
    account_id = container.registration_service.register(
        RegistrationInput(
            username="contoh_guru",
            password="Rahasia1!",
            full_name="Guru Contoh",
            role="teacher",
            email="guru@sekolah.sch.id",
            teacher_identifier=code,
            subject="Informatika",
        )
    )
    print("registered:", account_id)
    print(container.auth_service.authenticate("contoh_guru", "Rahasia1!"))


if __name__ == "__main__":
    main()
