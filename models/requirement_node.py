from extensions import db


# One row per requirement tree node, stored in pre-order.
#   root:   logic "&" or "|", course_id = owning course, parent_id NULL
#   group:  logic "&" or "|", parent_id set
#   leaf:   logic "C", req_course_id = required course, parent_id set
class RequirementNode(db.Model):
    __tablename__ = "requirement_node"

    id = db.Column(db.Integer, primary_key=True)

    # prerequisites | concurrent | corequisites | recommended
    category = db.Column(db.String(16), nullable=False, index=True)

    logic = db.Column(db.String(1), nullable=False)

    course_id = db.Column(
        db.Integer,
        db.ForeignKey("undergraduate_course.id", ondelete="CASCADE"),
        nullable=True,
    )

    req_course_id = db.Column(
        db.Integer,
        db.ForeignKey("undergraduate_course.id", ondelete="CASCADE"),
        nullable=True,
    )

    parent_id = db.Column(
        db.Integer,
        db.ForeignKey("requirement_node.id", ondelete="CASCADE"),
        nullable=True,
    )

    course = db.relationship(
        "UndergraduateCourse",
        foreign_keys=[course_id],
        back_populates="requirement_roots",
        lazy=True,
    )

    req_course = db.relationship(
        "UndergraduateCourse",
        foreign_keys=[req_course_id],
        lazy=True,
    )

    children = db.relationship(
        "RequirementNode",
        backref=db.backref("parent", remote_side=[id]),
        cascade="all, delete-orphan",
        order_by="RequirementNode.id",
        lazy=True,
    )

    def __repr__(self) -> str:
        return f"<RequirementNode {self.category} {self.logic} parent={self.parent_id}>"
