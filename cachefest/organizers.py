ORGANIZERS = [
    {"name": "Abhivan Charan", "role": "Event Coordinator"},
    {"name": "Naga Durga", "role": "Technical Lead"},
    {"name": "Vinod", "role": "Operations Head"},
    {"name": "Murali", "role": "Marketing Lead"},
    {"name": "Raghava", "role": "Development Lead"},
    {"name": "Zaheer", "role": "Design Head"},
    {"name": "Kranth", "role": "Logistics Coordinator"},
]

DEVELOPERS = [
    {
        "name": "R Karthikeya",
        "title": "CEO and Founder of UptoMo",
        "blurb": "Full-stack developer and tech entrepreneur",
    },
    {
        "name": "Raghava",
        "title": "Co-founder and Developer",
        "blurb": "Backend specialist and system architect",
    },
]


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split()).upper()
