from extensions import db


class CourseAttribute(db.Model):
    __tablename__ = "course_attribute"

    __table_args__ = (
        db.UniqueConstraint("course_id", "code", name="uq_course_attribute"),
    )

    id = db.Column(db.Integer, primary_key=True)

    course_id = db.Column(
        db.Integer,
        db.ForeignKey("undergraduate_course.id", ondelete="CASCADE"),
        nullable=False,
    )

    # short code, e.g. "GQ"
    code = db.Column(db.String(8), nullable=False)

    course = db.relationship("UndergraduateCourse", back_populates="attributes", lazy=True)

    def __repr__(self) -> str:
        return f"<CourseAttribute {self.course_id} {self.code}>"
