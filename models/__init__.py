# import every model so db.create_all() sees all tables
from models.course import UndergraduateCourse  # noqa: F401
from models.course_attribute import CourseAttribute  # noqa: F401
from models.crosslist import Crosslist  # noqa: F401
from models.requirement_node import RequirementNode  # noqa: F401
