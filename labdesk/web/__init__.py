"""HTTP applications, one package per app under `labdesk.web.<app>`."""
