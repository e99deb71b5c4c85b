def send_email(settings, subject: str, body: str):
    # “送らない”安全版（ログだけ）。NOTIFY_DRY_RUN=1 で使う
    to = ", ".join(settings.mail_to)
    print(f"[DRY-RUN EMAIL] to={to} subj={subject} body={body[:60]!r}")
