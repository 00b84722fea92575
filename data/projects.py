"""
Projects Table

Portfolio projects in display order, built once at import time.
"""

from typing import Tuple

from data.models import Project

PROJECTS: Tuple[Project, ...] = (
    Project(
        title="PDF Ambulance",
        techs=("PDF Tools",),
        link="https://pdfambulance.com",
    ),
    Project(
        title="Apoint (appointment management system)",
        techs=("Astro", "TypeScript", "Supabase"),
        link="https://astro-supabase-apoint.vercel.app",
    ),
    Project(
        title="apolloServer with openidConnect",
        techs=("Apollo", "graphql", "OIDC"),
        link="https://github.com/amirs18/apolloServer-with-openidConnect",
    ),
)
