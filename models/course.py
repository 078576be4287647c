from extensions import db


class UndergraduateCourse(db.Model):
    __tablename__ = "undergraduate_course"

    __table_args__ = (
        # "MATH 140" and "MATH 140H" are different courses
        db.UniqueConstraint("code", "number", "suffix", name="uq_course_identifier"),
    )

    id = db.Column(db.Integer, primary_key=True)

    code = db.Column(db.String(16), nullable=False, index=True)
    number = db.Column(db.Integer, nullable=False)
    # "" for no suffix, so uq_course_identifier also covers "MATH 140"
    suffix = db.Column(db.String(1), nullable=False, default="")

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)

    credits = db.Column(db.Float, nullable=False)
    min_credits = db.Column(db.Float, nullable=True)  # only for credit ranges

    is_prerequisite_concurrent_separate = db.Column(db.Boolean, nullable=False, default=False)
    empty_crosslist = db.Column(db.Boolean, nullable=False, default=False)
    unknown_requirement = db.Column(db.Boolean, nullable=False, default=False)

    attributes = db.relationship(
        "CourseAttribute",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy=True,
    )

    crosslists = db.relationship(
        "Crosslist",
        foreign_keys="Crosslist.course_id",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy=True,
    )

    # root rows only; inner nodes hang off their parent
    requirement_roots = db.relationship(
        "RequirementNode",
        foreign_keys="RequirementNode.course_id",
        back_populates="course",
        lazy=True,
    )

    @property
    def identifier(self) -> str:
        return f"{self.code} {self.number}{self.suffix or ''}"

    def __repr__(self) -> str:
        return f"<UndergraduateCourse {self.identifier}>"
