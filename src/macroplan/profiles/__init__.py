"""Body metrics and macro target calculation."""
