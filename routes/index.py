# routes/index.py
from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["index"])

LANDING_PAGE = """
<h1>Welcome to the Mentor-Student Database: Empowering Knowledge Through Guidance</h1>
<h3>Available API Endpoints:</h3>
<ul>
    <li><a href="/mentors">GET All Mentors</a></li>
    <li><a href="/students">GET All Students</a></li>
    <li><a href="/mentors/:mentorId/students">GET Students for a Mentor</a></li>
    <li><a href="/students/:studentId/previous-mentor">GET Previous Mentor for a Student</a></li>
</ul>
"""


@router.get("/", response_class=HTMLResponse)
async def index():
    return LANDING_PAGE
