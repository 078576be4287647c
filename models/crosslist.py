from extensions import db


# Course X is cross-listed with course Y
class Crosslist(db.Model):
    __tablename__ = "crosslist"

    __table_args__ = (
        db.UniqueConstraint("course_id", "crosslist_course_id", name="uq_crosslist_pair"),
    )

    id = db.Column(db.Integer, primary_key=True)

    course_id = db.Column(
        db.Integer,
        db.ForeignKey("undergraduate_course.id", ondelete="CASCADE"),
        nullable=False,
    )

    crosslist_course_id = db.Column(
        db.Integer,
        db.ForeignKey("undergraduate_course.id", ondelete="CASCADE"),
        nullable=False,
    )

    course = db.relationship(
        "UndergraduateCourse",
        foreign_keys=[course_id],
        back_populates="crosslists",
        lazy=True,
    )

    crosslist_course = db.relationship(
        "UndergraduateCourse",
        foreign_keys=[crosslist_course_id],
        lazy=True,
    )

    def __repr__(self) -> str:
        return f"<Crosslist {self.course_id} <-> {self.crosslist_course_id}>"
