from .computation import Computation as Computation
from .computation import Fault as Fault
from .computation import SequencingError as SequencingError
from .computation import resumable as resumable
from .config import Config as Config
from .config import FaultPolicy as FaultPolicy
from .driver import Driver as Driver
from .driver import driver as driver
from .producer import Cursor as Cursor
from .producer import Producer as Producer
from .producer import producer as producer
from .status import Status as Status
from .task import Task as Task
from .task import task as task
