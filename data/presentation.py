"""
Presentation Table

The site owner's introduction block, built once at import time.
"""

from data.models import Presentation, Social

PRESENTATION = Presentation(
    mail="amir.shafat1@gmail.com",
    title="Hi, I’m Amir 👋",
    # profile="/profile.webp",
    description="“Hey there! I’m Amir, your friendly neighborhood web developer.",
    socials=(
        Social(
            label="Linkedin",
            link="https://www.linkedin.com/in/amir-shafat-b261b8219/",
        ),
        Social(
            label="Facebook",
            link="https://www.facebook.com/amir.shafat.5/",
        ),
        Social(
            label="Github",
            link="https://github.com/amirs18",
        ),
    ),
)
