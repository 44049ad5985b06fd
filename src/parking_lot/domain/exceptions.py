class ParkingError(Exception):
    """Base exception for parking lot errors"""
    status_code = 500


class InvalidInputError(ParkingError):
    """Malformed or missing request data"""
    status_code = 400


class ConflictError(ParkingError):
    """Request clashes with the current state of the lot"""
    status_code = 409


class NotFoundError(ParkingError):
    """Referenced slot or vehicle does not exist"""
    status_code = 404


class InvalidPlateError(InvalidInputError):
    def __init__(self, plate: str):
        super().__init__(f"Invalid plate format: {plate!r}")
        self.plate = plate


class MissingFieldError(InvalidInputError):
    pass


class InvalidSlotStatusError(InvalidInputError):
    pass


class VehicleAlreadyParkedError(ConflictError):
    def __init__(self, plate: str):
        super().__init__(f"Vehicle {plate} already parked")
        self.plate = plate


class NoSlotAvailableError(ConflictError):
    def __init__(self, vehicle_type: str):
        super().__init__(f"No available slot for {vehicle_type}")
        self.vehicle_type = vehicle_type


class SlotIncompatibleError(ConflictError):
    def __init__(self, slot_number: str):
        super().__init__(f"Incompatible or unavailable slot {slot_number}")
        self.slot_number = slot_number


class SlotConflictError(ConflictError):
    def __init__(self, slot_number: str):
        super().__init__(f"Selected slot {slot_number} is currently active with another vehicle")
        self.slot_number = slot_number


class SlotNotFoundError(NotFoundError):
    def __init__(self, slot_ref: str):
        super().__init__(f"Slot {slot_ref} not found")
        self.slot_ref = slot_ref


class VehicleNotFoundError(NotFoundError):
    def __init__(self, plate: str):
        super().__init__(f"Vehicle {plate} not found")
        self.plate = plate
