"""ArchiMate 3.x vocabulary: layers, element types and relationship types."""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


class Layer(str, Enum):
    MOTIVATION = "Motivation"
    STRATEGY = "Strategy"
    BUSINESS = "Business"
    APPLICATION = "Application"
    TECHNOLOGY = "Technology"
    PHYSICAL = "Physical"
    IMPLEMENTATION = "Implementation"


class ElementType(str, Enum):
    # Motivation
    STAKEHOLDER = "Stakeholder"
    DRIVER = "Driver"
    ASSESSMENT = "Assessment"
    GOAL = "Goal"
    OUTCOME = "Outcome"
    PRINCIPLE = "Principle"
    REQUIREMENT = "Requirement"
    CONSTRAINT = "Constraint"
    MEANING = "Meaning"
    VALUE = "Value"

    # Strategy
    RESOURCE = "Resource"
    CAPABILITY = "Capability"
    COURSE_OF_ACTION = "CourseOfAction"
    VALUE_STREAM = "ValueStream"

    # Business
    BUSINESS_ACTOR = "BusinessActor"
    BUSINESS_ROLE = "BusinessRole"
    BUSINESS_COLLABORATION = "BusinessCollaboration"
    BUSINESS_INTERFACE = "BusinessInterface"
    BUSINESS_PROCESS = "BusinessProcess"
    BUSINESS_FUNCTION = "BusinessFunction"
    BUSINESS_INTERACTION = "BusinessInteraction"
    BUSINESS_EVENT = "BusinessEvent"
    BUSINESS_SERVICE = "BusinessService"
    BUSINESS_OBJECT = "BusinessObject"
    CONTRACT = "Contract"
    REPRESENTATION = "Representation"
    PRODUCT = "Product"

    # Application
    APPLICATION_COMPONENT = "ApplicationComponent"
    APPLICATION_COLLABORATION = "ApplicationCollaboration"
    APPLICATION_INTERFACE = "ApplicationInterface"
    APPLICATION_FUNCTION = "ApplicationFunction"
    APPLICATION_INTERACTION = "ApplicationInteraction"
    APPLICATION_PROCESS = "ApplicationProcess"
    APPLICATION_EVENT = "ApplicationEvent"
    APPLICATION_SERVICE = "ApplicationService"
    DATA_OBJECT = "DataObject"

    # Technology
    NODE = "Node"
    DEVICE = "Device"
    SYSTEM_SOFTWARE = "SystemSoftware"
    TECHNOLOGY_COLLABORATION = "TechnologyCollaboration"
    TECHNOLOGY_INTERFACE = "TechnologyInterface"
    PATH = "Path"
    COMMUNICATION_NETWORK = "CommunicationNetwork"
    TECHNOLOGY_FUNCTION = "TechnologyFunction"
    TECHNOLOGY_PROCESS = "TechnologyProcess"
    TECHNOLOGY_INTERACTION = "TechnologyInteraction"
    TECHNOLOGY_EVENT = "TechnologyEvent"
    TECHNOLOGY_SERVICE = "TechnologyService"
    ARTIFACT = "Artifact"

    # Physical
    EQUIPMENT = "Equipment"
    FACILITY = "Facility"
    DISTRIBUTION_NETWORK = "DistributionNetwork"
    MATERIAL = "Material"
    LOCATION = "Location"

    # Implementation & Migration
    WORK_PACKAGE = "WorkPackage"
    DELIVERABLE = "Deliverable"
    IMPLEMENTATION_EVENT = "ImplementationEvent"
    PLATEAU = "Plateau"
    GAP = "Gap"


class RelationshipType(str, Enum):
    # Structural
    COMPOSITION = "Composition"
    AGGREGATION = "Aggregation"
    ASSIGNMENT = "Assignment"
    REALIZATION = "Realization"

    # Dependency
    SERVING = "Serving"
    ACCESS = "Access"
    INFLUENCE = "Influence"

    # Dynamic
    TRIGGERING = "Triggering"
    FLOW = "Flow"

    # Other
    SPECIALIZATION = "Specialization"
    ASSOCIATION = "Association"
    JUNCTION = "Junction"


LAYER_ORDER: Tuple[Layer, ...] = (
    Layer.MOTIVATION,
    Layer.STRATEGY,
    Layer.BUSINESS,
    Layer.APPLICATION,
    Layer.TECHNOLOGY,
    Layer.PHYSICAL,
    Layer.IMPLEMENTATION,
)

RELATIONSHIP_ORDER: Tuple[RelationshipType, ...] = tuple(RelationshipType)

_TYPES_BY_LAYER: Dict[Layer, Tuple[ElementType, ...]] = {
    Layer.MOTIVATION: (
        ElementType.STAKEHOLDER,
        ElementType.DRIVER,
        ElementType.ASSESSMENT,
        ElementType.GOAL,
        ElementType.OUTCOME,
        ElementType.PRINCIPLE,
        ElementType.REQUIREMENT,
        ElementType.CONSTRAINT,
        ElementType.MEANING,
        ElementType.VALUE,
    ),
    Layer.STRATEGY: (
        ElementType.RESOURCE,
        ElementType.CAPABILITY,
        ElementType.COURSE_OF_ACTION,
        ElementType.VALUE_STREAM,
    ),
    Layer.BUSINESS: (
        ElementType.BUSINESS_ACTOR,
        ElementType.BUSINESS_ROLE,
        ElementType.BUSINESS_COLLABORATION,
        ElementType.BUSINESS_INTERFACE,
        ElementType.BUSINESS_PROCESS,
        ElementType.BUSINESS_FUNCTION,
        ElementType.BUSINESS_INTERACTION,
        ElementType.BUSINESS_EVENT,
        ElementType.BUSINESS_SERVICE,
        ElementType.BUSINESS_OBJECT,
        ElementType.CONTRACT,
        ElementType.REPRESENTATION,
        ElementType.PRODUCT,
    ),
    Layer.APPLICATION: (
        ElementType.APPLICATION_COMPONENT,
        ElementType.APPLICATION_COLLABORATION,
        ElementType.APPLICATION_INTERFACE,
        ElementType.APPLICATION_FUNCTION,
        ElementType.APPLICATION_INTERACTION,
        ElementType.APPLICATION_PROCESS,
        ElementType.APPLICATION_EVENT,
        ElementType.APPLICATION_SERVICE,
        ElementType.DATA_OBJECT,
    ),
    Layer.TECHNOLOGY: (
        ElementType.NODE,
        ElementType.DEVICE,
        ElementType.SYSTEM_SOFTWARE,
        ElementType.TECHNOLOGY_COLLABORATION,
        ElementType.TECHNOLOGY_INTERFACE,
        ElementType.PATH,
        ElementType.COMMUNICATION_NETWORK,
        ElementType.TECHNOLOGY_FUNCTION,
        ElementType.TECHNOLOGY_PROCESS,
        ElementType.TECHNOLOGY_INTERACTION,
        ElementType.TECHNOLOGY_EVENT,
        ElementType.TECHNOLOGY_SERVICE,
        ElementType.ARTIFACT,
    ),
    Layer.PHYSICAL: (
        ElementType.EQUIPMENT,
        ElementType.FACILITY,
        ElementType.DISTRIBUTION_NETWORK,
        ElementType.MATERIAL,
        ElementType.LOCATION,
    ),
    Layer.IMPLEMENTATION: (
        ElementType.WORK_PACKAGE,
        ElementType.DELIVERABLE,
        ElementType.IMPLEMENTATION_EVENT,
        ElementType.PLATEAU,
        ElementType.GAP,
    ),
}

ELEMENT_LAYERS: Dict[ElementType, Layer] = {
    element_type: layer
    for layer, element_types in _TYPES_BY_LAYER.items()
    for element_type in element_types
}

ELEMENT_TYPE_NAMES = frozenset(t.value for t in ElementType)
RELATIONSHIP_TYPE_NAMES = frozenset(t.value for t in RelationshipType)


def layer_of(element_type: ElementType) -> Layer:
    return ELEMENT_LAYERS[ElementType(element_type)]


def element_types_in_layer(layer: Layer | str) -> List[ElementType]:
    """Element types of one layer, in vocabulary order. Layer names are case-insensitive."""
    if isinstance(layer, str) and not isinstance(layer, Layer):
        token = layer.strip().lower()
        match = next((candidate for candidate in Layer if candidate.value.lower() == token), None)
        if match is None:
            raise ValueError(f"Unknown layer: {layer}")
        layer = match
    return list(_TYPES_BY_LAYER[layer])
