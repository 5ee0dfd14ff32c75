"""Firebase Admin SDK bootstrap shared by the Firestore and FCM adapters."""

import firebase_admin


def get_firebase_app() -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use.

    Credentials come from the environment (GOOGLE_APPLICATION_CREDENTIALS
    or the runtime's service account).
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        return firebase_admin.initialize_app()
