"""AWS-related detection rules."""

from vibesafe.rules.models import Rule

AWS_ACCESS_KEY_ID = Rule(
    id="AWS_ACCESS_KEY_ID",
    type="AWS Access Key ID",
    pattern=r"AKIA[0-9A-Z]{16}",
    severity="High",
)

# Exactly 40 base64-alphabet characters, not part of a longer run.
AWS_SECRET_ACCESS_KEY = Rule(
    id="AWS_SECRET_ACCESS_KEY",
    type="AWS Secret Access Key",
    pattern=r"(?<![A-Za-z0-9/+=])[A-Za-z0-9/+=]{40}(?![A-Za-z0-9/+=])",
    severity="High",
)

ALL_AWS_RULES = [AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY]
