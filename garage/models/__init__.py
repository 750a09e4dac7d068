# Garage backend — Database Models
# Import all models here for SQLAlchemy discovery

from garage.models.user import User                      # noqa
from garage.models.garage_auth import GarageAuth         # noqa
from garage.models.garage import Garage                  # noqa
from garage.models.customer import Customer              # noqa
from garage.models.vehicle import Vehicle                # noqa
from garage.models.motorcycle import Motorcycle          # noqa
from garage.models.part import Part, PartFitment         # noqa
